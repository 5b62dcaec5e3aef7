import os

import numpy as np

_ENV_SEED = "SPARSELU_SEED"
_current_seed = None


def set_seed(seed) -> None:
    global _current_seed
    if seed is None:
        _current_seed = None
        os.environ.pop(_ENV_SEED, None)
        return
    _current_seed = int(seed)
    os.environ[_ENV_SEED] = str(_current_seed)


def get_seed():
    # If user set env externally, honor it
    env = os.environ.get(_ENV_SEED)
    if env:
        try:
            return int(env)
        except ValueError:
            return _current_seed
    return _current_seed


def default_rng(rng=None) -> np.random.Generator:
    """Return a ``numpy.random.Generator`` for ``rng``.

    ``None`` falls back to the configured default seed (OS entropy when unset),
    an int is used as a seed and a Generator is passed through unchanged.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None:
        return np.random.default_rng(get_seed())
    return np.random.default_rng(rng)
