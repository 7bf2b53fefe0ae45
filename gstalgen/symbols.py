"""Symbol table that assigns GSTAL memory addresses to declared variables."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional

DEFAULT_CAPACITY = 2000

_BANNER = "\n********************** Symbol Table ***********************\n"
_RULE = "-----------------------------------------------------------\n"


class DataType(IntEnum):
    """Data type of a variable or expression."""

    INTEGER = 0
    REAL = 1


class VariableKind(IntEnum):
    """Whether a variable holds one value or an array of values."""

    SCALAR = 0
    ARRAY = 1


@dataclass(frozen=True)
class SymbolEntry:
    """One declared variable and the GSTAL memory it occupies."""

    name: str
    data_type: DataType
    kind: VariableKind
    size: int
    address: int


class SymbolTableFullError(Exception):
    """Raised when a symbol is inserted into a table that has no room left."""


class SymbolTable:
    """Ordered collection of declared variables.

    Each inserted variable is placed at the next free address; the next
    address then moves on by the variable's size.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._entries: list[SymbolEntry] = []
        self._next_address = 0

    def insert(
        self,
        name: str,
        data_type: DataType,
        kind: VariableKind = VariableKind.SCALAR,
        size: int = 1,
    ) -> SymbolEntry:
        """Add a variable and return its entry."""
        if not name:
            raise ValueError("cannot insert a symbol without a name")
        if len(self._entries) >= self.capacity:
            raise SymbolTableFullError("symbol table is full")
        entry = SymbolEntry(
            name=name,
            data_type=DataType(data_type),
            kind=VariableKind(kind),
            size=size,
            address=self._next_address,
        )
        self._entries.append(entry)
        self._next_address += size
        return entry

    def _find(self, name: str) -> Optional[SymbolEntry]:
        if not name:
            raise ValueError("cannot look up a symbol without a name")
        return next((e for e in self._entries if e.name == name), None)

    def lookup(self, name: str) -> Optional[int]:
        """Return the address of the first variable called ``name``, or None."""
        entry = self._find(name)
        return entry.address if entry else None

    def data_type_of(self, name: str) -> Optional[DataType]:
        """Return the data type of the first variable called ``name``, or None."""
        entry = self._find(name)
        return entry.data_type if entry else None

    def isp_size(self) -> int:
        """Number of stack slots reserved by the ISP instruction."""
        return len(self._entries)

    def format(self) -> str:
        """Return the table as a printable listing."""
        lines = [
            _BANNER,
            "%-15s %-10s %-10s %-10s %-10s\n"
            % ("Name", "Type", "Kind", "Size", "Address"),
            _RULE,
        ]
        for entry in self._entries:
            lines.append(
                "%-15s %-10s %-10s %-10d %-10d\n"
                % (
                    entry.name,
                    entry.data_type.name,
                    entry.kind.name,
                    entry.size,
                    entry.address,
                )
            )
        return "".join(lines)

    def show(self) -> None:
        """Print the table listing to standard output."""
        sys.stdout.write(self.format())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SymbolEntry]:
        return iter(self._entries)