"""
Identifier interning for jatom parse sessions.

A SymbolTable maps each identifier spelling seen during one parse to a
canonical Symbol, so downstream passes can compare identifiers by id.
The table is filled by the parser and frozen when the parse completes.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional


@dataclass(frozen=True)
class Symbol:
    """Canonical handle for one identifier spelling."""
    name: str
    id: int

    def __str__(self) -> str:
        return self.name


class SymbolTable:
    """Per-parse interning map from identifier text to Symbol."""

    def __init__(self):
        self._by_name: Dict[str, Symbol] = {}
        self._by_id: List[Symbol] = []
        self._frozen = False

    def intern(self, name: str) -> Symbol:
        """Return the symbol for `name`, creating it on first sight."""
        symbol = self._by_name.get(name)
        if symbol is not None:
            return symbol
        if self._frozen:
            raise RuntimeError(f"cannot intern {name!r}: symbol table is frozen")

        symbol = Symbol(name, len(self._by_id))
        self._by_name[name] = symbol
        self._by_id.append(symbol)
        return symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        return self._by_name.get(name)

    def name_of(self, symbol_id: int) -> str:
        """Map a symbol id back to its spelling."""
        return self._by_id[symbol_id].name

    def freeze(self):
        """Make the table read-only; called once parsing is done."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._by_id)

    def __repr__(self) -> str:
        return f"SymbolTable({len(self)} symbols{', frozen' if self._frozen else ''})"
