"""Base class for the sparse matrix formats.

`SparseMatrix` defines the interface shared by `COO`, `CSR` and `CSC`: shape
bookkeeping, bounds checking, point access and dense materialization. Each
concrete format keeps its own storage arrays and invariants.
"""

import enum
import logging
import operator

import numpy as np

logger = logging.getLogger(__name__)

VALUE_DTYPE = np.float32
INDEX_DTYPE = np.int64


class SetStatus(enum.Enum):
    """Outcome of :meth:`SparseMatrix.set`.

    Attributes
    ----------
    UPDATED
        The coordinate was already stored and its value was overwritten.
    INSERTED
        The coordinate was new and has been appended (COO only).
    NOT_PRESENT
        The coordinate is not part of a fixed layout (CSR/CSC); nothing changed.
    """

    UPDATED = "updated"
    INSERTED = "inserted"
    NOT_PRESENT = "not_present"

    def __bool__(self):
        return self is not SetStatus.NOT_PRESENT


def as_dense(matrix):
    """Coerce ``matrix`` to a 2D float32 ndarray, rejecting other ranks."""
    arr = np.asarray(matrix, dtype=VALUE_DTYPE)
    if arr.ndim != 2:
        raise ValueError("dense input must be 2D")
    return arr


def check_shape(shape):
    if len(shape) != 2:
        raise ValueError("SparseMatrix requires 2D shape")
    nrows, ncols = (int(s) for s in shape)
    if nrows < 0 or ncols < 0:
        raise ValueError("shape must be non-negative")
    return nrows, ncols


class SparseMatrix:
    """Abstract base class for 2D sparse matrices of float32 values.

    Parameters
    ----------
    shape : tuple[int, int]
        Matrix shape. Must be two-dimensional.

    Attributes
    ----------
    shape : tuple[int, int]
        Matrix dimensions ``(nrows, ncols)``.
    ndim : int
        Always 2.
    dtype : numpy.dtype
        Value dtype, ``float32``.

    Raises
    ------
    ValueError
        If ``shape`` is not 2D or has negative extents.
    """

    format = None
    _index_type = None

    def __init__(self, shape):
        self.shape = check_shape(shape)
        self.ndim = 2
        self.dtype = np.dtype(VALUE_DTYPE)

    @property
    def nnz(self):
        raise NotImplementedError

    @classmethod
    def zeros(cls, shape):
        """Return an empty matrix of ``shape`` with no stored entries."""
        raise NotImplementedError

    @classmethod
    def eye(cls, n):
        """Return the ``n x n`` identity matrix."""
        idx = np.arange(n, dtype=INDEX_DTYPE)
        flat = cls._index_type.from_coords(idx, idx, (n, n))
        return cls.from_flat_indices(flat, np.ones(n, dtype=VALUE_DTYPE))

    @classmethod
    def from_dense(cls, matrix):
        raise NotImplementedError

    @classmethod
    def from_flat_indices(cls, flat, values):
        raise NotImplementedError

    @classmethod
    def random(cls, nrows, ncols, density, rng=None):
        raise NotImplementedError

    def toarray(self):
        """Return a dense ``numpy.ndarray`` with the same shape.

        Notes
        -----
        The base implementation returns an all-zeros array. Concrete formats
        override this to materialize their entries.
        """
        return np.zeros(self.shape, dtype=VALUE_DTYPE)

    def check_bounds(self, i, j):
        """Validate a coordinate, returning it as a pair of Python ints.

        Raises
        ------
        IndexError
            If ``i`` or ``j`` lies outside ``[0, nrows)`` / ``[0, ncols)``.
        TypeError
            If ``i`` or ``j`` is not an integer.
        """
        i = operator.index(i)
        j = operator.index(j)
        if not (0 <= i < self.shape[0] and 0 <= j < self.shape[1]):
            raise IndexError(
                "index ({}, {}) out of bounds for shape {}".format(i, j, self.shape)
            )
        return i, j

    def _locate(self, i, j):
        """Return the storage position of ``(i, j)`` or ``None``."""
        raise NotImplementedError

    def get(self, i, j):
        """Return the stored value at ``(i, j)``, or ``0.0`` when absent."""
        i, j = self.check_bounds(i, j)
        pos = self._locate(i, j)
        if pos is None:
            return 0.0
        return float(self.data[pos])

    def set(self, i, j, value):
        """Overwrite the value at an existing stored position.

        Fixed-layout formats (CSR, CSC) cannot grow: setting a coordinate that
        is not stored leaves the matrix unchanged and returns
        ``SetStatus.NOT_PRESENT``. COO overrides this to append.

        Raises
        ------
        IndexError
            If the coordinate is out of bounds.
        """
        i, j = self.check_bounds(i, j)
        pos = self._locate(i, j)
        if pos is None:
            logger.warning(
                "%s: inserting new position (%d, %d) is not supported", self.format, i, j
            )
            return SetStatus.NOT_PRESENT
        self.data[pos] = value
        return SetStatus.UPDATED

    def __getitem__(self, key):
        if isinstance(key, tuple) and len(key) == 2:
            return self.get(*key)
        raise NotImplementedError("only scalar (i, j) indexing is supported")

    def __setitem__(self, key, value):
        if not (isinstance(key, tuple) and len(key) == 2):
            raise NotImplementedError("only scalar (i, j) indexing is supported")
        if not self.set(key[0], key[1], value):
            raise KeyError(
                "{} cannot insert new position {}".format(self.format, tuple(key))
            )

    def tocoo(self):
        raise NotImplementedError

    def tocsr(self):
        return self.tocoo().tocsr()

    def tocsc(self):
        return self.tocoo().tocsc()

    def __matmul__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        from ..linalg import matmul

        return matmul(self, other)

    def __repr__(self):
        return "<{} sparse matrix of shape {} with {} stored elements>".format(
            self.format, self.shape, self.nnz
        )
