"""
Generic display tree produced by every stage visualizer.

A TreeNode is stage-agnostic: it only knows a label, an optional
set of string attributes and an optional ordered list of children.  Any
tree-rendering surface can consume it, either directly or via `to_dict()`,
which produces the `{name, attributes, children}` JSON shape used by
hierarchical tree widgets.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple


@dataclass(frozen=True)
class TreeNode:
    """
    A node in a display tree.

    A node with `children` set to None is a leaf.  A node with an empty
    `children` tuple is a branch that happens to have no children (for
    example an empty sequence), and is rendered as such.
    """
    name: str
    attributes: Dict[str, str] | None = None
    children: Tuple['TreeNode', ...] | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("TreeNode name must be a non-empty string")

    def __hash__(self) -> int:
        # Dict attributes hash by their sorted items
        attributes = tuple(sorted(self.attributes.items())) if self.attributes else None
        return hash((self.name, attributes, self.children))

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children list at all."""
        return self.children is None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert this tree to plain dicts and lists suitable for JSON encoding.

        Returns:
            Dictionary with a `name` key, an `attributes` key if any attributes
            are set, and a `children` key if this node is a branch
        """
        result: Dict[str, Any] = {"name": self.name}
        if self.attributes:
            result["attributes"] = dict(self.attributes)

        if self.children is not None:
            result["children"] = [child.to_dict() for child in self.children]

        return result


def leaf(name: str, attributes: Dict[str, str] | None = None) -> TreeNode:
    """Create a leaf node."""
    return TreeNode(name=name, attributes=attributes)


def branch(name: str, children: Iterable[TreeNode], attributes: Dict[str, str] | None = None) -> TreeNode:
    """Create a branch node, preserving the order of `children`."""
    return TreeNode(name=name, attributes=attributes, children=tuple(children))
