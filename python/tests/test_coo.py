import numpy as np
import pytest

from sparselu.sparse import COO, SetStatus


def make_simple_coo():
    # A = [[1,0,2],[0,3,0]] in COO
    row = np.array([0, 1, 0], dtype=np.int64)
    col = np.array([0, 1, 2], dtype=np.int64)
    data = np.array([1.0, 3.0, 2.0], dtype=np.float32)
    return COO(row, col, data, (2, 3))


def test_coo_basic():
    A = make_simple_coo()
    assert A.nnz == 3
    assert A.get(0, 2) == 2.0
    assert A.get(1, 0) == 0.0
    np.testing.assert_array_equal(
        A.toarray(), np.array([[1.0, 0.0, 2.0], [0.0, 3.0, 0.0]], dtype=np.float32)
    )


def test_coo_set_operations():
    A = COO.zeros((3, 3))
    assert A.set(0, 0, 1.0) is SetStatus.INSERTED
    assert A.set(1, 1, 2.0) is SetStatus.INSERTED
    assert A.set(2, 2, 3.0) is SetStatus.INSERTED

    assert A.get(0, 0) == 1.0
    assert A.get(1, 1) == 2.0
    assert A.get(2, 2) == 3.0
    assert A.get(0, 1) == 0.0
    assert A.get(1, 0) == 0.0

    assert A.set(0, 0, 5.0) is SetStatus.UPDATED
    assert A.get(0, 0) == 5.0
    assert A.nnz == 3


def test_coo_setitem_grows_past_initial_capacity():
    A = COO.zeros((5, 5))
    for k in range(25):
        A[k // 5, k % 5] = float(k + 1)
    assert A.nnz == 25
    np.testing.assert_array_equal(
        A.toarray(), np.arange(1, 26, dtype=np.float32).reshape(5, 5)
    )
    assert A.row.size == A.col.size == A.data.size == 25


def test_coo_from_dense_is_row_major_order():
    A = COO.from_dense([[0.0, 2.0], [3.0, 4.0]])
    assert A.row.tolist() == [0, 1, 1]
    assert A.col.tolist() == [1, 0, 1]
    assert A.data.tolist() == [2.0, 3.0, 4.0]


def test_coo_rejects_duplicates_and_out_of_range():
    with pytest.raises(ValueError):
        COO([0, 0], [1, 1], [1.0, 2.0], (2, 2))
    with pytest.raises(ValueError):
        COO([0, 2], [0, 0], [1.0, 2.0], (2, 2))
    with pytest.raises(ValueError):
        COO([0, 1], [0], [1.0, 2.0], (2, 2))


def test_coo_random_has_distinct_positions():
    A = COO.random(40, 30, 0.4, rng=3)
    pairs = set(zip(A.row.tolist(), A.col.tolist()))
    assert len(pairs) == A.nnz == 480


def test_coo_dtype_is_float32():
    A = COO.from_dense([[1.5, 0.0]])
    assert A.data.dtype == np.float32
    assert A.toarray().dtype == np.float32
