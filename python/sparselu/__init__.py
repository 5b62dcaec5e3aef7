from ._runtime import default_rng, get_seed, set_seed
from . import sparse as sparse
from .linalg import coo_matmul, csr_csc_matmul, matmul
from .sparse import COO, CSC, CSR, ColMajorIndex, RowMajorIndex, SetStatus

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "set_seed",
    "get_seed",
    "default_rng",
    "sparse",
    "COO",
    "CSR",
    "CSC",
    "SetStatus",
    "RowMajorIndex",
    "ColMajorIndex",
    "matmul",
    "coo_matmul",
    "csr_csc_matmul",
]
