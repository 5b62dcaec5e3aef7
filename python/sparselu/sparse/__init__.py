from .base import SetStatus, SparseMatrix
from .coo import COO
from .csc import CSC
from .csr import CSR
from .flat import ColMajorIndex, RowMajorIndex

__all__ = [
    "CSR",
    "CSC",
    "COO",
    "SparseMatrix",
    "SetStatus",
    "RowMajorIndex",
    "ColMajorIndex",
]
