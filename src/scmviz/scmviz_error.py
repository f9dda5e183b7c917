"""Exception classes for scmviz with detailed context."""

import sys


class SchemeVizError(Exception):
    """Base exception for scmviz errors with detailed context information."""

    def __init__(
        self,
        message: str,
        context: str | None = None,
        expected: str | None = None,
        received: str | None = None,
        suggestion: str | None = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            expected: What was expected
            received: What was actually received
            suggestion: Suggestion for fixing the error
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion

        super().__init__(self._format_detailed_message())

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        return "\n".join(parts)


class SchemeVizUnknownNodeError(SchemeVizError):
    """
    A node's variant is not one of its stage's declared alternatives.

    This always means the producing stage and the node model have drifted
    apart, so it is never recovered from.
    """

    def __init__(self, stage: str, tag: str, expected: str | None = None):
        """
        Initialize unknown node error.

        Args:
            stage: Name of the stage whose visitor rejected the node
            tag: Tag (class name) of the unrecognized node
            expected: Optional description of the accepted variants
        """
        self.stage = stage
        self.tag = tag
        super().__init__(
            message=f"Unrecognized {stage} node: {tag}",
            received=tag,
            expected=expected
        )


class SchemeVizDecodeError(SchemeVizError):
    """A service payload cannot be decoded into the expected stage union."""

    def __init__(self, message: str, path: str, received: str | None = None, expected: str | None = None):
        """
        Initialize decode error.

        Args:
            message: Core error description
            path: JSON path of the offending element (e.g. "$[0].value.car")
            received: Short rendering of the offending element
            expected: What shape was expected at this path
        """
        self.path = path
        super().__init__(
            message=message,
            context=f"at {path}",
            received=received,
            expected=expected
        )


class SchemeVizServiceError(SchemeVizError):
    """The parser service could not be reached or returned an error status."""

    def __init__(self, message: str, status: int | None = None, details: str | None = None):
        """
        Initialize service error.

        Args:
            message: Core error description
            status: HTTP status code, if a response was received
            details: Response body or transport error text
        """
        self.status = status
        super().__init__(
            message=message,
            context=details,
            suggestion="Check that the parser service is running and that your code is valid Scheme"
        )


class SchemeVizConfigError(SchemeVizError):
    """The configuration file is missing or malformed."""


class SchemeVizNestingError(SchemeVizError):
    """A node is nested too deeply to be decoded or rendered."""

    def __init__(self, stage: str, operation: str):
        """
        Initialize nesting error.

        Args:
            stage: Name of the stage whose nodes were being processed
            operation: What was being done when the limit was hit ("decoding" or "rendering")
        """
        self.stage = stage
        self.operation = operation
        super().__init__(
            message=f"{stage} node is too deeply nested for {operation}",
            context=f"Python recursion limit is {sys.getrecursionlimit()}",
            suggestion="Split the form into smaller top-level forms"
        )
