from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Cell:
    """
    The derivation recorded for one (nonterminal, start, end) entry.
    `split` is the last position of the left part, None for single positions.
    """

    production: int
    split: Optional[int] = None


class Chart:
    """
    The CYK parse table over one word.

    Entries live in a flat list indexed by (nonterminal, start, end), with
    0 <= start <= end < length. Cells below the diagonal are never used.
    """

    def __init__(self, nonterminals: int, length: int):
        self.nonterminals = nonterminals
        self.length = length
        self._cells: List[Optional[Cell]] = [None] * (nonterminals * length * length)

    def _offset(self, nonterminal: int, start: int, end: int) -> int:
        return (nonterminal * self.length + start) * self.length + end

    def get(self, nonterminal: int, start: int, end: int) -> Optional[Cell]:
        return self._cells[self._offset(nonterminal, start, end)]

    def set(self, nonterminal: int, start: int, end: int, cell: Cell):
        self._cells[self._offset(nonterminal, start, end)] = cell

    def has(self, nonterminal: int, start: int, end: int) -> bool:
        return self._cells[self._offset(nonterminal, start, end)] is not None

    def filled(self) -> int:
        """Number of entries holding a derivation."""
        return sum(1 for cell in self._cells if cell is not None)

    def __repr__(self):
        return (
            f"<Chart nonterminals={self.nonterminals} "
            f"length={self.length} filled={self.filled()}>"
        )
