"""Storage shared by the compressed formats.

CSR and CSC differ only in which axis is compressed. Internally both speak of
a *major* axis (rows for CSR, columns for CSC), addressed through ``indptr``,
and a *minor* axis whose indices are stored sorted within each major slice.
"""

import numpy as np

from ._sampling import sample_positions
from .base import INDEX_DTYPE, VALUE_DTYPE, SparseMatrix, as_dense, check_shape


class _CompressedMatrix(SparseMatrix):
    """Base class for CSR and CSC.

    Subclasses set ``_major_axis`` (0 for rows, 1 for columns) and
    ``_index_type`` (the flat encoding whose sort order groups by the major
    axis).
    """

    _major_axis = None

    def __init__(self, indptr, indices, data, shape, check=True):
        super().__init__(shape=shape)
        self.indptr = np.array(indptr, dtype=INDEX_DTYPE).reshape(-1)
        self.indices = np.array(indices, dtype=INDEX_DTYPE).reshape(-1)
        self.data = np.array(data, dtype=VALUE_DTYPE).reshape(-1)
        if check:
            self._check()

    @classmethod
    def _swap(cls, pair):
        """Map ``(row, col)`` to ``(major, minor)`` and back."""
        a, b = pair
        return (a, b) if cls._major_axis == 0 else (b, a)

    @property
    def _major_dim(self):
        return self.shape[self._major_axis]

    @property
    def _minor_dim(self):
        return self.shape[1 - self._major_axis]

    def _check(self):
        nmajor, nminor = self._major_dim, self._minor_dim
        indptr, indices = self.indptr, self.indices
        if indptr.size != nmajor + 1:
            raise ValueError("indptr must have length {}".format(nmajor + 1))
        if indices.size != self.data.size:
            raise ValueError("indices and data must have equal length")
        if indptr[0] != 0 or indptr[-1] != indices.size:
            raise ValueError("indptr must start at 0 and end at nnz")
        if np.any(np.diff(indptr) < 0):
            raise ValueError("indptr must be non-decreasing")
        if indices.size == 0:
            return
        if indices.min() < 0 or indices.max() >= nminor:
            raise ValueError("index out of bounds")
        # strictly ascending within each slice; slice starts are exempt
        ascending = np.diff(indices) > 0
        starts = indptr[1:-1]
        starts = starts[(starts > 0) & (starts < indices.size)]
        ascending[starts - 1] = True
        if not ascending.all():
            raise ValueError("indices must be strictly increasing within each slice")

    @classmethod
    def from_arrays(cls, indptr, indices, data, shape, check=True):
        """Construct from raw compressed arrays.

        Parameters
        ----------
        indptr, indices, data, shape, check
            See the class constructor.
        """
        return cls(indptr, indices, data, shape, check=check)

    @classmethod
    def zeros(cls, shape):
        nmajor, _ = cls._swap(check_shape(shape))
        return cls(
            np.zeros(nmajor + 1, dtype=INDEX_DTYPE),
            np.empty(0, dtype=INDEX_DTYPE),
            np.empty(0, dtype=VALUE_DTYPE),
            shape,
            check=False,
        )

    @classmethod
    def from_flat_indices(cls, flat, values):
        """Build from flat positions in this format's encoding.

        Pairs are sorted by flat index, which groups them by major axis with
        ascending minor indices; ``indptr`` is then derived from the per-slice
        counts, so empty slices get zero-width ranges.

        Raises
        ------
        TypeError
            If ``flat`` is not this format's flat index type.
        ValueError
            If lengths differ or a position repeats.
        """
        if not isinstance(flat, cls._index_type):
            raise TypeError(
                "{} requires a {}, got {}".format(
                    cls.__name__, cls._index_type.__name__, type(flat).__name__
                )
            )
        values = np.asarray(values, dtype=VALUE_DTYPE).reshape(-1)
        if values.size != len(flat):
            raise ValueError("flat indices and values must have equal length")
        order = np.argsort(flat.flat, kind="stable")
        sorted_flat = flat.flat[order]
        if np.any(np.diff(sorted_flat) == 0):
            raise ValueError("duplicate flat indices")
        row, col = type(flat)(sorted_flat, flat.shape, check=False).coords()
        nmajor, _ = cls._swap(flat.shape)
        major, minor = cls._swap((row, col))
        counts = np.bincount(major, minlength=nmajor)
        indptr = np.zeros(nmajor + 1, dtype=INDEX_DTYPE)
        np.cumsum(counts, out=indptr[1:])
        return cls(indptr, minor, values[order], flat.shape, check=False)

    @classmethod
    def from_dense(cls, matrix):
        """Store every nonzero cell, scanning the major axis outermost."""
        arr = as_dense(matrix)
        oriented = arr if cls._major_axis == 0 else arr.T
        major, minor = np.nonzero(oriented)
        counts = np.bincount(major, minlength=oriented.shape[0])
        indptr = np.zeros(oriented.shape[0] + 1, dtype=INDEX_DTYPE)
        np.cumsum(counts, out=indptr[1:])
        return cls(indptr, minor, oriented[major, minor], arr.shape, check=False)

    @classmethod
    def random(cls, nrows, ncols, density, rng=None):
        """Random matrix with exactly ``floor(nrows * ncols * density)`` entries.

        Positions are drawn without replacement in this format's flat
        encoding and values uniformly from ``[0, 1)``.

        Parameters
        ----------
        nrows, ncols : int
            Matrix shape.
        density : float
            Fraction of cells to fill, in ``[0, 1]``.
        rng : None, int or numpy.random.Generator, optional
            Randomness source, see `sparselu.default_rng`.
        """
        flat, values = sample_positions(nrows, ncols, density, rng)
        return cls.from_flat_indices(
            cls._index_type(flat, (nrows, ncols), check=False), values
        )

    @property
    def nnz(self):
        """Number of stored entries."""
        return int(self.data.size)

    def _slice_range(self, k):
        return int(self.indptr[k]), int(self.indptr[k + 1])

    def _locate(self, i, j):
        major, minor = self._swap((i, j))
        start, end = self._slice_range(major)
        pos = int(np.searchsorted(self.indices[start:end], minor))
        if start + pos < end and self.indices[start + pos] == minor:
            return start + pos
        return None

    def _major_of_entries(self):
        """Major-axis index of every stored entry."""
        return np.repeat(
            np.arange(self._major_dim, dtype=INDEX_DTYPE), np.diff(self.indptr)
        )

    def _coords(self):
        return self._swap((self._major_of_entries(), self.indices))

    def to_flat_indices(self):
        """Return ``(flat, values)`` in storage order using this format's encoding."""
        row, col = self._coords()
        return self._index_type.from_coords(row, col, self.shape), self.data.copy()

    def toarray(self):
        """Materialize as a dense float32 ``numpy.ndarray``."""
        out = np.zeros(self.shape, dtype=VALUE_DTYPE)
        row, col = self._coords()
        out[row, col] = self.data
        return out

    def tocoo(self):
        """Expand to coordinate triples, preserving storage order."""
        from .coo import COO

        flat, values = self.to_flat_indices()
        return COO.from_flat_indices(flat, values)
