"""
Error types for Calcamabob tokenizing, parsing, and evaluation.
"""

from dataclasses import dataclass


class CalcError(Exception):
    """Base exception for all Calcamabob errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message

    @property
    def position(self) -> int | None:
        """Offset into the source text, when known."""
        if self.context:
            return self.context.position
        return None


class TokenizeError(CalcError):
    """
    Raised when source text cannot be tokenized.

    Only raised in strict mode; by default unrecognized characters are
    dropped.
    """

    pass


class ParseError(CalcError):
    """
    Raised when a token stream does not form an expression.

    Examples:
    - Empty input ("incomplete expression")
    - Operator where a value was expected ("expecting literal")
    - Value where an operator was expected ("expecting operator")
    - Missing close parenthesis after a grouping or function call
    - Tokens left over after a complete expression
    """

    pass


class EvaluationError(CalcError):
    """
    Raised when a parsed expression cannot be evaluated.

    Examples:
    - Unknown function name, e.g. ``foo(``
    - Operator with no arithmetic meaning
    """

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        source: The full text that was being processed
        position: Offset of the offending character (0-indexed)
    """

    source: str
    position: int

    @property
    def line(self) -> int:
        """Line number (1-indexed)."""
        return self.source.count("\n", 0, self.position) + 1

    @property
    def column(self) -> int:
        """Column number (1-indexed)."""
        line_start = self.source.rfind("\n", 0, self.position) + 1
        return self.position - line_start + 1

    def format(self) -> str:
        """
        Format the location with the offending line and a caret marker.

        Returns:
            A string like::

                line 1, column 3
                   1 | 2 * * 3
                           ^
        """
        lines = self.source.split("\n")
        text = lines[self.line - 1] if self.line <= len(lines) else ""
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^"
        return f"line {self.line}, column {self.column}\n{prefix}{text}\n{marker}"


def make_tokenize_error(message: str, source: str, position: int) -> TokenizeError:
    """Create a TokenizeError pointing at ``position`` in ``source``."""
    return TokenizeError(message, ErrorContext(source=source, position=position))


def make_parse_error(message: str, source: str | None, position: int) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        source: Source text, if the caller still has it
        position: Offset of the offending token

    Returns:
        ParseError with context attached when ``source`` is known
    """
    if source is None:
        return ParseError(message)
    return ParseError(message, ErrorContext(source=source, position=position))
