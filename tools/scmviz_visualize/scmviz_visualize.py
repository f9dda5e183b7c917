#!/usr/bin/env python3
"""Command-line tool for visualizing Scheme front-end stages."""

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from scmviz import SchemeViz, SchemeVizError, ParserServiceSettings, ParsingMode, TreeNode, format_tree


def render(tree: TreeNode | None, output_format: str) -> str:
    """Render a display tree (or the absence of one) in the requested format."""
    if output_format == 'json':
        return json.dumps(tree.to_dict() if tree is not None else {}, indent=2) + '\n'

    if tree is None:
        return '(no forms)\n'

    return format_tree(tree) + '\n'


def main() -> int:
    """Main entry point for the scmviz CLI."""
    parser = argparse.ArgumentParser(
        description='Show the reader, tag parser or semantic analyzer output for Scheme code as a tree',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the reader output for the last form in a file
  scmviz_visualize program.scm

  # Show the semantic analyzer output, reading source from stdin
  echo "(lambda (x) (set! x 1))" | scmviz_visualize - --mode semantic-analyzer

  # Use a specific parser service configuration
  scmviz_visualize program.scm --config configurations.json

  # Render a previously saved service response as tree JSON
  scmviz_visualize --response response.json --mode tag-parser --format json
"""
    )
    parser.add_argument(
        'input',
        nargs='?',
        help='Scheme source file (use "-" for stdin); not needed with --response'
    )
    parser.add_argument(
        '-m', '--mode',
        default=ParsingMode.READER.value,
        help='Stage to show: reader, tag-parser or semantic-analyzer (default: reader)'
    )
    parser.add_argument(
        '-c', '--config',
        help='JSON configuration file with the parser service address'
    )
    parser.add_argument(
        '-r', '--response',
        help='Saved JSON service response to render instead of calling the service'
    )
    parser.add_argument(
        '-f', '--format',
        choices=['text', 'json'],
        default='text',
        help='Output format (default: text)'
    )
    parser.add_argument(
        '-o', '--output',
        help='Output file (default: stdout)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log requests and decoding details'
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    try:
        mode = ParsingMode.from_string(args.mode)

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.response is None and args.input is None:
        print("Error: Either an input file or --response is required", file=sys.stderr)
        return 1

    try:
        settings = ParserServiceSettings.load(args.config) if args.config else None
        viz = SchemeViz(settings)

        if args.response is not None:
            response_path = Path(args.response)
            if not response_path.exists():
                print(f"Error: File not found: {args.response}", file=sys.stderr)
                return 1

            payload = json.loads(response_path.read_text(encoding='utf-8'))
            tree = viz.visualize_response(mode, payload)

        else:
            if args.input == '-':
                source_code = sys.stdin.read()

            else:
                input_path = Path(args.input)
                if not input_path.exists():
                    print(f"Error: File not found: {args.input}", file=sys.stderr)
                    return 1

                source_code = input_path.read_text(encoding='utf-8')

            tree = asyncio.run(viz.build_tree(source_code, mode))

    except json.JSONDecodeError as e:
        print(f"Error: Response file is not valid JSON: {e}", file=sys.stderr)
        return 1

    except SchemeVizError as e:
        print(str(e), file=sys.stderr)
        return 1

    output = render(tree, args.format)
    if args.output:
        Path(args.output).write_text(output, encoding='utf-8')
        print(f"Tree written to {args.output}")

    else:
        print(output, end='')

    return 0


if __name__ == '__main__':
    sys.exit(main())
