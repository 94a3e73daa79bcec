from __future__ import annotations
from typing import Sequence
import numpy as np
import pandas as pd
from .errors import MCMCError


class ChainStore:
    """Preallocated (n_rows, k) buffer of retained draws, filled in iteration order."""

    def __init__(self, n_rows: int, columns: Sequence[str]):
        self.columns = list(columns)
        self._out = np.full((n_rows, len(self.columns)), np.nan, dtype=float)
        self._next = 0

    def __len__(self) -> int:
        return self._next

    @property
    def n_rows(self) -> int:
        return self._out.shape[0]

    @property
    def full(self) -> bool:
        return self._next == self.n_rows

    def append(self, row) -> None:
        row = np.asarray(row, dtype=float).reshape(-1)
        if row.shape[0] != self._out.shape[1]:
            raise MCMCError(f"row has {row.shape[0]} values, chain has {self._out.shape[1]} columns")
        if self.full:
            raise MCMCError(f"chain already holds {self.n_rows} rows")
        self._out[self._next] = row
        self._next += 1

    def finalize(self) -> np.ndarray:
        if not self.full:
            raise MCMCError(f"chain has {self._next} of {self.n_rows} rows")
        self._out.setflags(write=False)
        return self._out

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.finalize(), columns=self.columns)
