import logging
import math

import numpy as np

from .._runtime import default_rng
from .base import INDEX_DTYPE, VALUE_DTYPE

logger = logging.getLogger(__name__)


def target_nnz(nrows, ncols, density):
    """Exact stored-entry count for a random ``nrows x ncols`` matrix."""
    density = float(density)
    if not 0.0 <= density <= 1.0:
        raise ValueError("density must lie in [0, 1]")
    return int(math.floor(nrows * ncols * density))


def sample_positions(nrows, ncols, density, rng=None):
    """Draw distinct flat positions and uniform ``[0, 1)`` values.

    Exactly ``floor(nrows * ncols * density)`` positions are chosen without
    replacement from ``range(nrows * ncols)``, so the count is exact rather
    than a per-cell coin flip.

    Returns
    -------
    flat : numpy.ndarray of int64
        Distinct positions in draw order, in whichever encoding the caller
        wraps them.
    values : numpy.ndarray of float32
    """
    rng = default_rng(rng)
    nnz = target_nnz(nrows, ncols, density)
    # choice without shuffle tracks only the drawn positions when nnz is small
    flat = rng.choice(nrows * ncols, size=nnz, replace=False, shuffle=False)
    values = rng.random(nnz, dtype=VALUE_DTYPE)
    logger.debug("sampled %d positions for shape (%d, %d)", nnz, nrows, ncols)
    return np.asarray(flat, dtype=INDEX_DTYPE), values
