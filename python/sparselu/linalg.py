"""Sparse-sparse matrix multiplication.

Two algorithms are provided, one per storage layout that suits it:

- `coo_matmul` joins unordered COO operands through a hash map keyed on the
  shared inner index.
- `csr_csc_matmul` walks each row of a CSR operand against each column of a
  CSC operand with a two-pointer merge over their sorted index slices.

`matmul` (and the ``@`` operator on every format) picks between them and
converts operands whose layout fits neither.
"""

import logging
from collections import defaultdict

import numpy as np

from .sparse import COO, CSC, CSR, SparseMatrix
from .sparse.base import INDEX_DTYPE, VALUE_DTYPE

logger = logging.getLogger(__name__)

_FORMATS = ("coo", "csr", "csc")


def _check_inner(a, b):
    if a.shape[1] != b.shape[0]:
        raise ValueError(
            "inner dimensions must match for matmul: {} @ {}".format(a.shape, b.shape)
        )


def _as_format(m, format):
    if format is None or m.format == format:
        return m
    if format not in _FORMATS:
        raise ValueError("format must be one of {}".format(_FORMATS))
    return getattr(m, "to" + format)()


def coo_matmul(a, b):
    """Multiply two COO matrices with a hash join.

    The nonzeros of ``b`` are bucketed by row; each nonzero ``(i, k, v)`` of
    ``a`` is joined with bucket ``k`` and the products are summed per output
    coordinate in a dict, so memory follows the number of distinct output
    positions rather than ``nrows * ncols``.

    Parameters
    ----------
    a : COO
        Left operand of shape ``(m, k)``.
    b : COO
        Right operand of shape ``(k, n)``.

    Returns
    -------
    COO
        Product of shape ``(m, n)``. Entries whose products cancel exactly are
        kept as explicit zeros.

    Raises
    ------
    TypeError
        If either operand is not a COO.
    ValueError
        If ``a.shape[1] != b.shape[0]``.
    """
    if not (isinstance(a, COO) and isinstance(b, COO)):
        raise TypeError("coo_matmul requires two COO operands")
    _check_inner(a, b)

    b_rows = defaultdict(list)
    for k, j, v in zip(b.row.tolist(), b.col.tolist(), b.data.tolist()):
        b_rows[k].append((j, v))

    acc = defaultdict(float)
    for i, k, v in zip(a.row.tolist(), a.col.tolist(), a.data.tolist()):
        for j, w in b_rows.get(k, ()):
            acc[(i, j)] += v * w

    shape = (a.shape[0], b.shape[1])
    if acc:
        row, col = zip(*acc.keys())
        out = COO(row, col, list(acc.values()), shape, check=False)
    else:
        out = COO.zeros(shape)
    logger.debug(
        "coo_matmul %s @ %s: nnz %d x %d -> %d", a.shape, b.shape, a.nnz, b.nnz, out.nnz
    )
    return out


def csr_csc_matmul(a, b, format="csr"):
    """Multiply a CSR matrix by a CSC matrix with a sorted merge join.

    For every nonempty row ``i`` of ``a`` and nonempty column ``j`` of ``b``
    the dot product is taken by advancing two pointers over the row's column
    indices and the column's row indices, both ascending, so each pair costs
    ``O(|row i| + |col j|)``. Dot products that come out exactly zero are not
    stored.

    Parameters
    ----------
    a : CSR
        Left operand of shape ``(m, k)``.
    b : CSC
        Right operand of shape ``(k, n)``.
    format : {"csr", "csc"}, optional
        Layout of the result.

    Returns
    -------
    CSR or CSC
        Product of shape ``(m, n)``.

    Raises
    ------
    TypeError
        If the operands are not CSR and CSC.
    ValueError
        If ``a.shape[1] != b.shape[0]`` or ``format`` is unknown.
    """
    if not (isinstance(a, CSR) and isinstance(b, CSC)):
        raise TypeError("csr_csc_matmul requires a CSR left and a CSC right operand")
    _check_inner(a, b)
    if format not in ("csr", "csc"):
        raise ValueError("format must be 'csr' or 'csc'")

    nrows, ncols = a.shape[0], b.shape[1]
    a_ptr, a_idx, a_val = a.indptr.tolist(), a.indices.tolist(), a.data.tolist()
    b_ptr, b_idx, b_val = b.indptr.tolist(), b.indices.tolist(), b.data.tolist()
    b_cols = [j for j in range(ncols) if b_ptr[j] < b_ptr[j + 1]]

    indptr = np.zeros(nrows + 1, dtype=INDEX_DTYPE)
    indices = []
    data = []
    for i in range(nrows):
        r_start, r_end = a_ptr[i], a_ptr[i + 1]
        if r_start < r_end:
            for j in b_cols:
                r, c = r_start, b_ptr[j]
                c_end = b_ptr[j + 1]
                total = 0.0
                while r < r_end and c < c_end:
                    ak = a_idx[r]
                    bk = b_idx[c]
                    if ak == bk:
                        total += a_val[r] * b_val[c]
                        r += 1
                        c += 1
                    elif ak < bk:
                        r += 1
                    else:
                        c += 1
                # stored as float32, so test the rounded value
                value = VALUE_DTYPE(total)
                if value != 0.0:
                    indices.append(j)
                    data.append(value)
        indptr[i + 1] = len(indices)

    out = CSR(
        indptr,
        np.asarray(indices, dtype=INDEX_DTYPE),
        np.asarray(data, dtype=VALUE_DTYPE),
        (nrows, ncols),
        check=False,
    )
    logger.debug(
        "csr_csc_matmul %s @ %s: nnz %d x %d -> %d", a.shape, b.shape, a.nnz, b.nnz, out.nnz
    )
    return _as_format(out, format)


def matmul(a, b, format=None):
    """Multiply two sparse matrices held in any of the supported formats.

    - COO @ COO uses `coo_matmul`.
    - CSR @ CSC uses `csr_csc_matmul`.
    - CSR @ CSR converts the right operand to CSC first.
    - Any other pairing converts the left operand to CSR and the right to CSC.

    Parameters
    ----------
    a, b : SparseMatrix
        Operands with ``a.shape[1] == b.shape[0]``.
    format : {None, "coo", "csr", "csc"}, optional
        Layout of the result. ``None`` keeps whatever the chosen algorithm
        produces (COO for the hash join, CSR for the merge join).
    """
    if not (isinstance(a, SparseMatrix) and isinstance(b, SparseMatrix)):
        raise TypeError("matmul requires two sparse matrices")
    _check_inner(a, b)
    if format is not None and format not in _FORMATS:
        raise ValueError("format must be one of {}".format(_FORMATS))

    if isinstance(a, COO) and isinstance(b, COO):
        return _as_format(coo_matmul(a, b), format)
    left = a if isinstance(a, CSR) else a.tocsr()
    right = b if isinstance(b, CSC) else b.tocsc()
    return _as_format(csr_csc_matmul(left, right), format)
