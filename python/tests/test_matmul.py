import itertools

import numpy as np
import pytest

from sparselu import coo_matmul, csr_csc_matmul, matmul
from sparselu.sparse import COO, CSC, CSR


def dense_matmul(a, b):
    """Reference triple-loop product."""
    rows, inner = a.shape
    assert inner == b.shape[0], "Matrix dimensions must be compatible for multiplication"
    out = np.zeros((rows, b.shape[1]), dtype=np.float64)
    for i in range(rows):
        for j in range(b.shape[1]):
            for k in range(inner):
                out[i, j] += float(a[i, k]) * float(b[k, j])
    return out


def sparse_dense(rng, nrows, ncols, density):
    vals = rng.random((nrows, ncols), dtype=np.float32)
    return np.where(rng.random((nrows, ncols)) < density, vals, 0.0).astype(np.float32)


def test_coo_multiplication_simple(dense_simple):
    b = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]], dtype=np.float32)
    C = coo_matmul(COO.from_dense(dense_simple), COO.from_dense(b))
    assert isinstance(C, COO)
    assert C.shape == (3, 2)
    np.testing.assert_array_equal(C.toarray(), dense_matmul(dense_simple, b))


def test_csr_csc_multiplication_simple(dense_simple):
    b = np.array([[1.0, 0.0, 2.0], [0.0, 1.0, 0.0], [3.0, 0.0, 1.0]], dtype=np.float32)
    C = csr_csc_matmul(CSR.from_dense(dense_simple), CSC.from_dense(b))
    assert isinstance(C, CSR)
    np.testing.assert_array_equal(C.toarray(), dense_matmul(dense_simple, b))


@pytest.mark.parametrize("left,right", list(itertools.product([COO, CSR, CSC], repeat=2)))
def test_matmul_random_all_format_pairs(left, right):
    rng = np.random.default_rng(2024)
    a = sparse_dense(rng, 20, 16, 0.3)
    b = sparse_dense(rng, 16, 12, 0.3)
    C = matmul(left.from_dense(a), right.from_dense(b))
    assert C.shape == (20, 12)
    np.testing.assert_allclose(C.toarray(), dense_matmul(a, b), rtol=1e-5, atol=1e-6)


def test_matmul_operator(dense_simple):
    A = CSR.from_dense(dense_simple)
    C = A @ CSR.from_dense(dense_simple)
    np.testing.assert_allclose(C.toarray(), dense_matmul(dense_simple, dense_simple))
    D = COO.from_dense(dense_simple) @ COO.from_dense(dense_simple)
    assert isinstance(D, COO)
    np.testing.assert_allclose(D.toarray(), dense_matmul(dense_simple, dense_simple))


def test_identity_and_zero(fmt, dense_simple):
    X = fmt.from_dense(dense_simple)
    I = fmt.eye(3)
    np.testing.assert_array_equal((X @ I).toarray(), dense_simple)
    np.testing.assert_array_equal((I @ X).toarray(), dense_simple)

    Z = fmt.from_dense(np.zeros((3, 2)))
    XZ = X @ Z
    assert XZ.shape == (3, 2)
    assert XZ.nnz == 0
    np.testing.assert_array_equal(XZ.toarray(), np.zeros((3, 2), dtype=np.float32))


def test_merge_join_output_stays_sparse():
    # block-diagonal operands: off-block dot products are all zero
    a = np.zeros((6, 6), dtype=np.float32)
    a[:3, :3] = 1.0
    a[3:, 3:] = 2.0
    C = csr_csc_matmul(CSR.from_dense(a), CSC.from_dense(a))
    assert C.nnz == 18
    assert C.nnz < C.shape[0] * C.shape[1]
    assert np.all(C.data != 0.0)
    np.testing.assert_allclose(C.toarray(), dense_matmul(a, a))


def test_merge_join_drops_float32_underflow():
    # 1e-30 * 1e-30 is nonzero in float64 but rounds to 0.0 in float32
    C = csr_csc_matmul(CSR.from_dense([[1e-30]]), CSC.from_dense([[1e-30]]))
    assert C.nnz == 0
    assert C.indptr.tolist() == [0, 0]
    assert C.data.dtype == np.float32


def test_merge_join_result_rows_sorted():
    A = CSR.random(30, 25, 0.15, rng=8)
    B = CSC.random(25, 20, 0.15, rng=9)
    C = csr_csc_matmul(A, B)
    CSR(C.indptr, C.indices, C.data, C.shape, check=True)
    np.testing.assert_allclose(C.toarray(), dense_matmul(A.toarray(), B.toarray()), rtol=1e-5, atol=1e-6)


def test_cancellation_behaviour():
    a = np.array([[1.0, 1.0]], dtype=np.float32)
    b = np.array([[1.0], [-1.0]], dtype=np.float32)
    # the hash join keeps the exact-zero accumulation as an explicit entry
    C = coo_matmul(COO.from_dense(a), COO.from_dense(b))
    assert C.nnz == 1
    assert C.get(0, 0) == 0.0
    # the merge join drops it
    D = csr_csc_matmul(CSR.from_dense(a), CSC.from_dense(b))
    assert D.nnz == 0


def test_result_format_selection(dense_simple):
    A = CSR.from_dense(dense_simple)
    B = CSC.from_dense(dense_simple)
    C = csr_csc_matmul(A, B, format="csc")
    assert isinstance(C, CSC)
    np.testing.assert_allclose(C.toarray(), dense_matmul(dense_simple, dense_simple))
    D = matmul(COO.from_dense(dense_simple), COO.from_dense(dense_simple), format="csr")
    assert isinstance(D, CSR)
    with pytest.raises(ValueError):
        matmul(A, B, format="dense")


def test_dimension_mismatch():
    a = np.ones((2, 3), dtype=np.float32)
    b = np.ones((2, 3), dtype=np.float32)
    with pytest.raises(ValueError):
        coo_matmul(COO.from_dense(a), COO.from_dense(b))
    with pytest.raises(ValueError):
        csr_csc_matmul(CSR.from_dense(a), CSC.from_dense(b))
    with pytest.raises(ValueError):
        CSR.from_dense(a) @ CSR.from_dense(b)


def test_wrong_operand_types(dense_simple):
    with pytest.raises(TypeError):
        coo_matmul(CSR.from_dense(dense_simple), COO.from_dense(dense_simple))
    with pytest.raises(TypeError):
        csr_csc_matmul(CSR.from_dense(dense_simple), CSR.from_dense(dense_simple))
    with pytest.raises(TypeError):
        matmul(CSR.from_dense(dense_simple), dense_simple)
