"""Bounded, append-only variable table with case-insensitive names.

Entries are never removed or reordered, so the index handed out when a
name is first created stays valid for the lifetime of the table.
"""

from __future__ import annotations

from typing import Iterator

from .config import MAX_VARIABLES
from .errors import ErrorKind, VariableError
from .logging_config import get_logger

logger = get_logger("variables")


class VariableTable:
    """Ordered (name, value) storage with lookup-or-create semantics."""

    def __init__(self, max_variables: int = MAX_VARIABLES):
        self.max_variables = max_variables
        self._names: list[str] = []
        self._values: list[float] = []
        self._index: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._index

    def __iter__(self) -> Iterator[tuple[str, float]]:
        return iter(zip(list(self._names), list(self._values)))

    def __repr__(self) -> str:
        return f"VariableTable({len(self)}/{self.max_variables})"

    def find(self, name: str) -> int | None:
        """Return the index of ``name``, or None if it was never created."""
        return self._index.get(name.upper())

    def get_or_create(self, name: str) -> int:
        """Return the index of ``name``, creating it with value 0.0 if absent.

        Raises:
            VariableError: VARIABLE_FULL when the table is at capacity,
                HEAP_FULL when the name cannot be stored
        """
        index = self.find(name)
        if index is not None:
            return index
        return self._create(name.upper(), 0.0)

    def assign(self, name: str, value: float) -> int:
        """Store ``value`` under ``name``, creating the entry if needed."""
        index = self.find(name)
        if index is None:
            return self._create(name.upper(), value)
        self._values[index] = value
        return index

    def set(self, index: int, value: float) -> None:
        self._values[index] = value

    def value(self, index: int) -> float:
        return self._values[index]

    def entry(self, index: int) -> tuple[str, float] | None:
        """Return ``(name, value)`` at ``index``, or None past the end."""
        if index < 0 or index >= len(self._names):
            return None
        return self._names[index], self._values[index]

    def _create(self, name: str, value: float) -> int:
        if len(self._names) >= self.max_variables:
            logger.warning(
                "Variable table full (%d entries), cannot create %s",
                self.max_variables,
                name,
            )
            raise VariableError(ErrorKind.VARIABLE_FULL)
        try:
            self._names.append(name)
            self._values.append(value)
        except MemoryError:
            # Keep the two lists the same length
            del self._names[len(self._values) :]
            raise VariableError(ErrorKind.HEAP_FULL) from None
        index = len(self._names) - 1
        self._index[name] = index
        logger.debug("Created variable %s at index %d", name, index)
        return index
