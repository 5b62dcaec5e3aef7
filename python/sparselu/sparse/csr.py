"""Compressed sparse row (CSR) matrix.

The row pointer array ``indptr`` delimits, for each row ``i``, the slice
``[indptr[i], indptr[i + 1])`` of ``indices`` (column indices) and ``data``.
Column indices are strictly increasing within each row, which makes point
lookup a binary search and lets `sparselu.linalg.csr_csc_matmul` merge rows
against sorted columns.

The layout is fixed once built: `set` may overwrite a stored value but never
creates a new position.
"""

from ._compressed import _CompressedMatrix
from .flat import RowMajorIndex


class CSR(_CompressedMatrix):
    """Compressed Sparse Row (CSR) matrix.

    Parameters
    ----------
    indptr : array-like of int64, shape (n_rows + 1,)
        Row pointer array. Must be non-decreasing, start at 0, end at `nnz`.
    indices : array-like of int64, shape (nnz,)
        Column indices for each entry. Must be strictly increasing within each row.
    data : array-like of float32, shape (nnz,)
        Stored values.
    shape : tuple[int, int]
        Matrix shape (n_rows, n_cols).
    check : bool, optional (default: True)
        When True, validate the structural invariants above.

    Raises
    ------
    ValueError
        If ``check`` is True and the structure is invalid.

    Examples
    --------
    >>> import numpy as np
    >>> from sparselu.sparse import CSR
    >>> a = CSR.from_dense([[1.0, 0.0, 2.0], [0.0, 3.0, 0.0]])
    >>> a.indptr.tolist(), a.indices.tolist()
    ([0, 2, 3], [0, 2, 1])
    >>> a.get(0, 2)
    2.0
    >>> a.set(1, 0, 9.0)
    <SetStatus.NOT_PRESENT: 'not_present'>
    """

    format = "csr"
    _major_axis = 0
    _index_type = RowMajorIndex

    def num_nnz_in_row(self, i):
        """Number of stored entries in row ``i``."""
        start, end = self.row_range(i)
        return end - start

    def row_range(self, i):
        """Half-open ``(start, end)`` range of row ``i`` in ``indices``/``data``."""
        if not 0 <= i < self.shape[0]:
            raise IndexError("row {} out of bounds".format(i))
        return self._slice_range(i)

    def tocsr(self):
        return CSR(self.indptr.copy(), self.indices.copy(), self.data.copy(), self.shape, check=False)
