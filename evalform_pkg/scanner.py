"""Cursor-based scanner for formula text.

The scanner never splits the whole formula up front. Each call looks at the
characters under the cursor, classifies exactly one lexical item and moves
the cursor past it. Errors are not raised here; methods return ``None`` or
``0`` and leave the cursor on the offending character so the evaluator can
record the error at the right position.
"""

from __future__ import annotations

from .config import IDENTIFIER_RE, NUMBER_RE, WHITESPACE
from .types import OPERATOR_CHARS, Operator


class Scanner:
    """A read position inside a formula string."""

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = min(max(pos, 0), len(text))

    def __repr__(self) -> str:
        return f"Scanner(pos={self.pos}, rest={self.text[self.pos:]!r})"

    @property
    def current(self) -> str:
        """Character under the cursor, or '' at end of input."""
        if self.pos >= len(self.text):
            return ""
        return self.text[self.pos]

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def skip_whitespace(self) -> None:
        while self.current and self.current in WHITESPACE:
            self.pos += 1

    def consume(self, char: str) -> bool:
        """Consume ``char`` if it is under the cursor."""
        if self.current == char:
            self.pos += 1
            return True
        return False

    def consume_sign(self) -> bool:
        """Consume one leading sign. Returns True when it was a minus."""
        if self.consume("-"):
            return True
        self.consume("+")
        return False

    def at_number(self) -> bool:
        return self.current != "" and self.current in "0123456789."

    def read_number(self) -> float:
        """Consume the longest decimal/exponential literal at the cursor.

        Like ``strtod``, returns 0.0 without moving when nothing matches.
        """
        match = NUMBER_RE.match(self.text, self.pos)
        if match is None:
            return 0.0
        self.pos = match.end()
        return float(match.group())

    def identifier_length(self) -> int:
        """Length of the identifier starting at the cursor, 0 if there is none."""
        match = IDENTIFIER_RE.match(self.text, self.pos)
        if match is None:
            return 0
        return match.end() - self.pos

    def read_identifier(self, length: int) -> str:
        """Consume ``length`` characters and return them upper-cased."""
        token = self.text[self.pos : self.pos + length].upper()
        self.pos += length
        return token

    def read_operator(self) -> Operator | None:
        """Classify and consume the operator at the cursor.

        End of input maps to Operator.END_LINE and is not consumed. Any
        unrecognized character returns None and is left in place.
        """
        if self.at_end():
            return Operator.END_LINE
        operator = OPERATOR_CHARS.get(self.current)
        if operator is not None:
            self.pos += 1
        return operator
