"""
Symbol interning for corpus tokens.

.. codeauthor:: corpusmi contributors
"""

from typing import Dict, Iterable, Iterator, List, Optional

import polars as pl


class SymbolTable:
    """
    Bidirectional mapping between strings and small integer identifiers.

    Identifiers are assigned densely from 0 in order of first sight and
    never change afterwards.

    Example:
        >>> symbols = SymbolTable()
        >>> symbols.intern("house")
        0
        >>> symbols.intern("boat")
        1
        >>> symbols.intern("house")
        0
        >>> symbols.resolve(1)
        'boat'
    """

    def __init__(self, symbols: Optional[Iterable[str]] = None):
        self._symbols: List[str] = []
        self._index: Dict[str, int] = {}

        if symbols is not None:
            for symbol in symbols:
                self.intern(symbol)

    def intern(self, symbol: str) -> int:
        """Get the identifier of a symbol, assigning a new one on first sight."""
        idx = self._index.get(symbol)
        if idx is None:
            idx = len(self._symbols)
            self._index[symbol] = idx
            self._symbols.append(symbol)
        return idx

    def lookup(self, symbol: str) -> Optional[int]:
        """Get the identifier of a symbol without interning it."""
        return self._index.get(symbol)

    def resolve(self, idx: int) -> str:
        """
        Get the symbol of an identifier.

        :raises KeyError: If the identifier was never assigned
        """
        if isinstance(idx, bool) or not 0 <= idx < len(self._symbols):
            raise KeyError(idx)
        return self._symbols[idx]

    def to_frame(self) -> pl.DataFrame:
        """Get the table as a polars DataFrame with 'symbol' and 'id' columns."""
        return pl.DataFrame(
            {
                "symbol": self._symbols,
                "id": list(range(len(self._symbols))),
            },
            schema={"symbol": pl.String, "id": pl.UInt32},
        )

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, symbol) -> bool:
        return symbol in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolTable({len(self)} symbols)"
