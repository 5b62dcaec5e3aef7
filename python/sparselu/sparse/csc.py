"""Compressed sparse column (CSC) matrix, the column-major dual of CSR."""

import numpy as np

from ._compressed import _CompressedMatrix
from .flat import ColMajorIndex


class CSC(_CompressedMatrix):
    """Compressed Sparse Column (CSC) matrix.

    Parameters
    ----------
    indptr : array_like of int64, shape ``(ncols + 1,)``
        Column pointer array.
    indices : array_like of int64, shape ``(nnz,)``
        Row indices of stored values, strictly increasing within each column.
    data : array_like of float32, shape ``(nnz,)``
        Stored values.
    shape : tuple of int
        Matrix shape ``(nrows, ncols)``.
    check : bool, optional
        If True, validate structural invariants.

    Attributes
    ----------
    indptr, indices, data : numpy.ndarray
        Storage arrays for CSC structure and values.
    shape : tuple[int, int]
        Matrix dimensions.
    nnz : int
        Number of stored elements.

    Notes
    -----
    Like CSR, the layout is fixed: `set` on a position that is not stored
    returns ``SetStatus.NOT_PRESENT`` and changes nothing.

    Examples
    --------
    >>> from sparselu.sparse import CSC
    >>> a = CSC.from_dense([[1.0, 0.0, 2.0], [0.0, 3.0, 0.0]])
    >>> a.indptr.tolist(), a.indices.tolist()
    ([0, 1, 2, 3], [0, 1, 0])
    >>> a.nonzero_columns()
    [0, 1, 2]
    """

    format = "csc"
    _major_axis = 1
    _index_type = ColMajorIndex

    def num_nnz_in_column(self, j):
        start, end = self.column_range(j)
        return end - start

    def column_range(self, j):
        """Half-open ``(start, end)`` range of column ``j`` in ``indices``/``data``."""
        if not 0 <= j < self.shape[1]:
            raise IndexError("column {} out of bounds".format(j))
        return self._slice_range(j)

    def nonzero_columns(self):
        """Indices of columns holding at least one stored entry."""
        return np.flatnonzero(np.diff(self.indptr)).tolist()

    def tocsc(self):
        return CSC(self.indptr.copy(), self.indices.copy(), self.data.copy(), self.shape, check=False)
