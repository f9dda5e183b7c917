"""Main scmviz class tying the stage visualizers to the parser service."""

import logging
from typing import Any, Callable, Dict, Sequence

from scmviz.scmviz_analyzed_visualizer import AnalyzedVisualizer
from scmviz.scmviz_client import SchemeParserClient
from scmviz.scmviz_config import ParserServiceSettings
from scmviz.scmviz_decoder import SchemeVizDecoder
from scmviz.scmviz_error import SchemeVizNestingError
from scmviz.scmviz_parsed_visualizer import ParsedVisualizer
from scmviz.scmviz_parsing_mode import ParsingMode
from scmviz.scmviz_sexpr_visualizer import SExprVisualizer
from scmviz.scmviz_tree_node import TreeNode


class SchemeViz:
    """
    Scheme front-end visualizer.

    Turns the output of any front-end stage (reader, tag parser or semantic
    analyzer) into a display tree.  The stage output can be supplied as
    already-built nodes, as a raw JSON response from the parser service, or
    fetched from the service directly from source text.
    """

    def __init__(self, settings: ParserServiceSettings | None = None) -> None:
        """
        Initialize the visualizer.

        Args:
            settings: Parser service settings (defaults to a local service)
        """
        self._settings = settings or ParserServiceSettings.create_default()
        self._decoder = SchemeVizDecoder()
        self._logger = logging.getLogger("SchemeViz")

        sexpr_visualizer = SExprVisualizer()
        self._visualizers: Dict[ParsingMode, Callable[[Any], TreeNode]] = {
            ParsingMode.READER: sexpr_visualizer.visualize,
            ParsingMode.TAG_PARSER: ParsedVisualizer(sexpr_visualizer).visualize,
            ParsingMode.SEMANTIC_ANALYZER: AnalyzedVisualizer(sexpr_visualizer).visualize,
        }

    @property
    def settings(self) -> ParserServiceSettings:
        """Parser service settings in use."""
        return self._settings

    def visualize(self, mode: ParsingMode, node: Any) -> TreeNode:
        """
        Render a single node of the stage selected by `mode`.

        Args:
            mode: Stage that `node` belongs to
            node: A reader value, parsed expression or analyzed expression

        Returns:
            The display tree for `node`

        Raises:
            SchemeVizUnknownNodeError: If `node` is not a node of the selected stage
            SchemeVizNestingError: If `node` is nested too deeply to render
        """
        try:
            return self._visualizers[mode](node)

        except RecursionError as e:
            self._logger.warning("%s node is too deeply nested to render", mode.value)
            raise SchemeVizNestingError(stage=mode.value, operation="rendering") from e

    def visualize_last(self, mode: ParsingMode, nodes: Sequence[Any]) -> TreeNode | None:
        """
        Render the last of a sequence of nodes.

        Args:
            mode: Stage that `nodes` belong to
            nodes: Nodes in source order, one per top-level form

        Returns:
            The display tree for the final node, or None if there are no nodes
        """
        if not nodes:
            return None

        return self.visualize(mode, nodes[-1])

    def visualize_response(self, mode: ParsingMode, payload: Any) -> TreeNode | None:
        """
        Decode a parser service response and render its last node.

        Args:
            mode: Stage the response was produced by
            payload: The decoded JSON response

        Returns:
            The display tree for the final node, or None if the response is empty

        Raises:
            SchemeVizDecodeError: If the response is not valid for `mode`
            SchemeVizNestingError: If a node is nested too deeply to decode or render
        """
        nodes = self._decoder.decode_response(mode, payload)
        self._logger.debug("Decoded %d %s node(s)", len(nodes), mode.value)
        return self.visualize_last(mode, nodes)

    async def build_tree(self, code: str, mode: ParsingMode) -> TreeNode | None:
        """
        Run the parser service on `code` and render the last top-level form.

        Args:
            code: Scheme source text
            mode: Stage whose output should be rendered

        Returns:
            The display tree for the final form, or None if the source has no forms

        Raises:
            SchemeVizServiceError: If the service call fails
            SchemeVizDecodeError: If the service response is not valid for `mode`
            SchemeVizNestingError: If a node is nested too deeply to decode or render
        """
        client = SchemeParserClient(self._settings)
        payload = await client.fetch(code, mode)
        return self.visualize_response(mode, payload)
