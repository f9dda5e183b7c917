"""Indented text rendering of display trees, for terminals and logs."""

from scmviz.scmviz_tree_node import TreeNode


def format_tree(node: TreeNode, indent: int = 0, indent_size: int = 2) -> str:
    """
    Pretty-print a display tree.

    Each node is printed on its own line, indented by its depth.  Attributes
    follow the name in square brackets, and a branch with no children is
    marked with "(empty)" so it can be told apart from a leaf.

    Args:
        node: The tree to print
        indent: Current indentation level
        indent_size: Number of spaces per indentation level

    Returns:
        String representation of the tree (no trailing newline)
    """
    prefix = " " * (indent * indent_size)
    line = f"{prefix}{node.name}"
    if node.attributes:
        attrs = ", ".join(f"{key}={value}" for key, value in node.attributes.items())
        line += f" [{attrs}]"

    if node.children is not None and not node.children:
        line += " (empty)"

    lines = [line]
    for child in node.children or ():
        lines.append(format_tree(child, indent + 1, indent_size))

    return "\n".join(lines)
