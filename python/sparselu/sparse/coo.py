import numpy as np

from ._sampling import sample_positions
from .base import INDEX_DTYPE, VALUE_DTYPE, SetStatus, SparseMatrix, as_dense
from .flat import ColMajorIndex, RowMajorIndex


class COO(SparseMatrix):
    """Coordinate (COO) sparse matrix.

    Parameters
    ----------
    row : array_like of int64
        Row indices for stored entries, length ``nnz``.
    col : array_like of int64
        Column indices for stored entries, length ``nnz``.
    data : array_like of float32
        Stored values, length ``nnz``.
    shape : tuple of int
        Matrix shape ``(nrows, ncols)``.
    check : bool, optional
        If True, validate lengths, bounds and coordinate uniqueness.

    Attributes
    ----------
    row, col, data : numpy.ndarray
        Views of the storage arrays, each of length ``nnz``.
    shape : tuple[int, int]
        Matrix dimensions.
    nnz : int
        Number of stored elements.

    Notes
    -----
    Entries are unordered and every ``(row, col)`` pair appears at most once.
    Point access (`get`, `set`) scans all stored entries, so it costs
    O(nnz) per call; build COO matrices up front rather than querying them in
    a hot loop. `set` on a new coordinate appends in amortized O(1).

    Examples
    --------
    >>> from sparselu.sparse import COO
    >>> a = COO.zeros((2, 3))
    >>> a.set(0, 2, 4.0)
    <SetStatus.INSERTED: 'inserted'>
    >>> a.set(0, 2, 5.0)
    <SetStatus.UPDATED: 'updated'>
    >>> a.nnz, a.get(0, 2), a.get(1, 1)
    (1, 5.0, 0.0)
    """

    format = "coo"
    _index_type = RowMajorIndex

    def __init__(self, row, col, data, shape, check=True):
        super().__init__(shape=shape)
        row = np.array(row, dtype=INDEX_DTYPE).reshape(-1)
        col = np.array(col, dtype=INDEX_DTYPE).reshape(-1)
        data = np.array(data, dtype=VALUE_DTYPE).reshape(-1)
        if not (row.size == col.size == data.size):
            raise ValueError("row, col and data must have equal length")
        self._row = row
        self._col = col
        self._data = data
        self._nnz = int(data.size)
        if check:
            self._check()

    def _check(self):
        nrows, ncols = self.shape
        if self._nnz == 0:
            return
        if self.row.min() < 0 or self.row.max() >= nrows:
            raise ValueError("row index out of bounds")
        if self.col.min() < 0 or self.col.max() >= ncols:
            raise ValueError("column index out of bounds")
        flat = RowMajorIndex.from_coords(self.row, self.col, self.shape).flat
        if np.unique(flat).size != flat.size:
            raise ValueError("duplicate coordinates in COO input")

    @classmethod
    def from_arrays(cls, row, col, data, shape, check=True):
        """Construct from coordinate and value arrays.

        Parameters
        ----------
        row, col, data, shape, check
            See `COO.__init__`.
        """
        return cls(row, col, data, shape, check=check)

    @classmethod
    def zeros(cls, shape):
        return cls([], [], [], shape, check=False)

    @classmethod
    def from_dense(cls, matrix):
        """Store every nonzero cell of ``matrix`` in row-major scan order."""
        arr = as_dense(matrix)
        row, col = np.nonzero(arr)
        return cls(row, col, arr[row, col], arr.shape, check=False)

    @classmethod
    def from_flat_indices(cls, flat, values):
        """Build from a `RowMajorIndex` or `ColMajorIndex` and matching values.

        Entries keep the order of ``flat``.
        """
        if not isinstance(flat, (RowMajorIndex, ColMajorIndex)):
            raise TypeError("flat must be a RowMajorIndex or ColMajorIndex")
        values = np.asarray(values, dtype=VALUE_DTYPE).reshape(-1)
        if values.size != len(flat):
            raise ValueError("flat indices and values must have equal length")
        if np.unique(flat.flat).size != flat.flat.size:
            raise ValueError("duplicate flat indices")
        row, col = flat.coords()
        return cls(row, col, values, flat.shape, check=False)

    @classmethod
    def random(cls, nrows, ncols, density, rng=None):
        """Random matrix with exactly ``floor(nrows * ncols * density)`` entries.

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
        return cls.from_flat_indices(RowMajorIndex(flat, (nrows, ncols), check=False), values)

    @property
    def row(self):
        return self._row[: self._nnz]

    @property
    def col(self):
        return self._col[: self._nnz]

    @property
    def data(self):
        return self._data[: self._nnz]

    @property
    def nnz(self):
        """Number of stored values."""
        return self._nnz

    def _locate(self, i, j):
        hits = np.flatnonzero((self.row == i) & (self.col == j))
        if hits.size == 0:
            return None
        return int(hits[0])

    def _grow(self):
        cap = max(8, 2 * self._data.size)
        for name, dtype in (("_row", INDEX_DTYPE), ("_col", INDEX_DTYPE), ("_data", VALUE_DTYPE)):
            buf = np.zeros(cap, dtype=dtype)
            buf[: self._nnz] = getattr(self, name)[: self._nnz]
            setattr(self, name, buf)

    def set(self, i, j, value):
        """Set the value at ``(i, j)``, appending the coordinate if it is new.

        Returns
        -------
        SetStatus
            ``UPDATED`` or ``INSERTED``.

        Raises
        ------
        IndexError
            If the coordinate is out of bounds.
        """
        i, j = self.check_bounds(i, j)
        pos = self._locate(i, j)
        if pos is not None:
            self._data[pos] = value
            return SetStatus.UPDATED
        if self._nnz == self._data.size:
            self._grow()
        k = self._nnz
        self._row[k] = i
        self._col[k] = j
        self._data[k] = value
        self._nnz += 1
        return SetStatus.INSERTED

    def to_flat_indices(self):
        """Return ``(RowMajorIndex, values)`` in storage order."""
        flat = RowMajorIndex.from_coords(self.row, self.col, self.shape)
        return flat, self.data.copy()

    def toarray(self):
        """Convert to a dense float32 ``ndarray`` of shape ``(nrows, ncols)``."""
        out = np.zeros(self.shape, dtype=VALUE_DTYPE)
        out[self.row, self.col] = self.data
        return out

    def tocoo(self):
        return COO(self.row, self.col, self.data, self.shape, check=False)

    def tocsr(self):
        """Group entries by row, columns ascending within each row."""
        from .csr import CSR

        flat, values = self.to_flat_indices()
        return CSR.from_flat_indices(flat, values)

    def tocsc(self):
        """Group entries by column, rows ascending within each column."""
        from .csc import CSC

        flat, values = self.to_flat_indices()
        return CSC.from_flat_indices(flat.to_col_major(), values)
