import numpy as np
import pytest

from sparselu.sparse import COO, CSC, CSR


@pytest.fixture(params=[COO, CSR, CSC], ids=["coo", "csr", "csc"])
def fmt(request):
    return request.param


@pytest.fixture
def dense_simple():
    return np.array([[1.0, 2.0, 0.0], [0.0, 3.0, 4.0], [5.0, 0.0, 6.0]], dtype=np.float32)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
