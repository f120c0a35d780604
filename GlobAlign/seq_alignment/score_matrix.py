"""
Score Matrix Container
Dense 2-D integer table used as the memo for global alignment
"""

import numpy as np
from typing import Tuple


class ScoreMatrix:
    """2-D int64 table addressed by (row, col) with strict bounds checking"""

    def __init__(self, rows: int, cols: int, fill: int = 0):
        """
        Allocate a rows x cols matrix

        Parameters:
        -----------
        rows : int
            Number of rows (len(seq1) + 1 for alignment)
        cols : int
            Number of columns (len(seq2) + 1 for alignment)
        fill : int
            Initial value of every cell (default 0)
        """
        if rows < 1 or cols < 1:
            raise ValueError(f"Matrix extents must be positive, got {rows} x {cols}")
        self._data = np.full((rows, cols), fill, dtype=np.int64)

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    def _check(self, row: int, col: int) -> None:
        # numpy would silently wrap negative indices
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"Cell ({row}, {col}) out of range for {self.rows} x {self.cols} matrix"
            )

    def get(self, row: int, col: int) -> int:
        self._check(row, col)
        return int(self._data[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        self._check(row, col)
        self._data[row, col] = value

    def fill_all(self, value: int) -> None:
        """Set every cell to value"""
        self._data.fill(value)

    def is_filled(self, sentinel: int) -> bool:
        """True when no cell still holds the sentinel"""
        return not bool(np.any(self._data == sentinel))

    def is_blank(self, sentinel: int) -> bool:
        """True when every cell still holds the sentinel"""
        return bool(np.all(self._data == sentinel))

    def to_numpy(self) -> np.ndarray:
        """Read-only copy of the underlying array"""
        out = self._data.copy()
        out.flags.writeable = False
        return out

    def __getitem__(self, key: Tuple[int, int]) -> int:
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key: Tuple[int, int], value: int) -> None:
        row, col = key
        self.set(row, col, value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ScoreMatrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def __repr__(self) -> str:
        return f"ScoreMatrix({self.rows} x {self.cols})"
