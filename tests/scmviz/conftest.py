"""Shared fixtures and utilities for scmviz tests."""

from typing import List

import pytest

from scmviz import (
    SchemeViz, SExprVisualizer, ParsedVisualizer, AnalyzedVisualizer, SchemeVizDecoder, TreeNode
)


@pytest.fixture
def sexpr_visualizer():
    """Create a fresh reader value visualizer for each test."""
    return SExprVisualizer()


@pytest.fixture
def parsed_visualizer():
    """Create a fresh parsed expression visualizer for each test."""
    return ParsedVisualizer()


@pytest.fixture
def analyzed_visualizer():
    """Create a fresh analyzed expression visualizer for each test."""
    return AnalyzedVisualizer()


@pytest.fixture
def decoder():
    """Create a fresh wire decoder for each test."""
    return SchemeVizDecoder()


@pytest.fixture
def viz():
    """Create a SchemeViz instance with default settings."""
    return SchemeViz()


class SchemeVizTestHelpers:
    """Helper utilities for scmviz testing."""

    @staticmethod
    def child_names(node: TreeNode) -> List[str]:
        """Names of the direct children of a branch node."""
        assert node.children is not None, f"Expected a branch, got leaf '{node.name}'"
        return [child.name for child in node.children]

    @staticmethod
    def leaf_names(node: TreeNode) -> List[str]:
        """Names of all leaves under `node`, in depth-first order."""
        if node.children is None:
            return [node.name]

        names: List[str] = []
        for child in node.children:
            names.extend(SchemeVizTestHelpers.leaf_names(child))

        return names

    @staticmethod
    def assert_leaf(node: TreeNode, name: str) -> None:
        """Assert that `node` is a leaf with the given name."""
        assert node.is_leaf, f"Expected leaf '{name}', got branch '{node.name}'"
        assert node.name == name, f"Expected leaf '{name}', got '{node.name}'"

    @staticmethod
    def wire(tag: str, value=None) -> dict:
        """Build a `{type, value}` wire object."""
        if value is None:
            return {"type": tag}

        return {"type": tag, "value": value}

    @staticmethod
    def wire_list(items: list) -> dict:
        """Build an OcamlList wire object."""
        return {"type": "OcamlList", "value": items}


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return SchemeVizTestHelpers
