"""Front-end stages whose output can be visualized."""

from enum import Enum


class ParsingMode(Enum):
    """
    Stage of the Scheme front end to run.

    The value of each member is the mode string the parser service expects.
    """
    READER = "READER"
    TAG_PARSER = "TAG_PARSER"
    SEMANTIC_ANALYZER = "SEMANTIC_ANALYZER"

    @classmethod
    def from_string(cls, mode: str) -> 'ParsingMode':
        """
        Look up a mode by name, ignoring case and treating '-' as '_'.

        Args:
            mode: Mode name, e.g. "READER" or "tag-parser"

        Returns:
            The matching mode

        Raises:
            ValueError: If `mode` does not name a parsing mode
        """
        key = mode.strip().upper().replace('-', '_')
        try:
            return cls[key]

        except KeyError as e:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Not a parsing mode: {mode!r} (expected one of {valid})") from e
