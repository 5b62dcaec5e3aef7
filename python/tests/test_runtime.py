import numpy as np
import pytest

import sparselu
from sparselu.sparse import CSR


@pytest.fixture
def restore_seed():
    yield
    sparselu.set_seed(None)


def test_set_seed_makes_random_reproducible(restore_seed):
    sparselu.set_seed(123)
    assert sparselu.get_seed() == 123
    A = CSR.random(10, 10, 0.3)
    B = CSR.random(10, 10, 0.3)
    np.testing.assert_array_equal(A.toarray(), B.toarray())


def test_seed_from_environment(monkeypatch, restore_seed):
    monkeypatch.setenv("SPARSELU_SEED", "77")
    assert sparselu.get_seed() == 77


def test_default_rng_passthrough():
    g = np.random.default_rng(0)
    assert sparselu.default_rng(g) is g
    assert isinstance(sparselu.default_rng(5), np.random.Generator)
