"""Flat (single integer) encodings of matrix positions.

A position ``(row, col)`` of an ``nrows x ncols`` matrix is serialized either
row-major, ``row * ncols + col``, or column-major, ``col * nrows + row``. The
two encodings are kept as separate types so that one is never handed to code
expecting the other; converting between them always goes back through
``(row, col)``.

Examples
--------
>>> import numpy as np
>>> from sparselu.sparse.flat import RowMajorIndex
>>> rm = RowMajorIndex(np.array([5]), shape=(2, 3))  # (1, 2)
>>> rm.coords()
(array([1]), array([2]))
>>> rm.to_col_major().flat
array([5])
>>> RowMajorIndex(np.array([1]), shape=(2, 3)).to_col_major().flat  # (0, 1)
array([2])
"""

import numpy as np

from .base import INDEX_DTYPE, check_shape


class _FlatIndex:
    """Shared storage for the two encodings; not used directly."""

    def __init__(self, flat, shape, check=True):
        self.shape = check_shape(shape)
        self.flat = np.asarray(flat, dtype=INDEX_DTYPE).reshape(-1)
        if check and self.flat.size:
            size = self.shape[0] * self.shape[1]
            if self.flat.min() < 0 or self.flat.max() >= size:
                raise ValueError("flat index out of range for shape {}".format(self.shape))

    def __len__(self):
        return int(self.flat.size)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self.flat, other.flat)

    __hash__ = None

    def __repr__(self):
        return "{}({!r}, shape={})".format(type(self).__name__, self.flat, self.shape)


class RowMajorIndex(_FlatIndex):
    """Positions encoded as ``row * ncols + col``."""

    @classmethod
    def from_coords(cls, row, col, shape):
        nrows, ncols = check_shape(shape)
        row = np.asarray(row, dtype=INDEX_DTYPE)
        col = np.asarray(col, dtype=INDEX_DTYPE)
        return cls(row * ncols + col, (nrows, ncols))

    def coords(self):
        """Decode into ``(row, col)`` arrays."""
        ncols = self.shape[1]
        if ncols == 0:
            empty = np.empty(0, dtype=INDEX_DTYPE)
            return empty, empty.copy()
        return self.flat // ncols, self.flat % ncols

    def to_col_major(self):
        row, col = self.coords()
        return ColMajorIndex.from_coords(row, col, self.shape)

    def to_row_major(self):
        return self


class ColMajorIndex(_FlatIndex):
    """Positions encoded as ``col * nrows + row``."""

    @classmethod
    def from_coords(cls, row, col, shape):
        nrows, ncols = check_shape(shape)
        row = np.asarray(row, dtype=INDEX_DTYPE)
        col = np.asarray(col, dtype=INDEX_DTYPE)
        return cls(col * nrows + row, (nrows, ncols))

    def coords(self):
        """Decode into ``(row, col)`` arrays."""
        nrows = self.shape[0]
        if nrows == 0:
            empty = np.empty(0, dtype=INDEX_DTYPE)
            return empty, empty.copy()
        return self.flat % nrows, self.flat // nrows

    def to_row_major(self):
        row, col = self.coords()
        return RowMajorIndex.from_coords(row, col, self.shape)

    def to_col_major(self):
        return self
