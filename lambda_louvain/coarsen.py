# lambda_louvain/coarsen.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
import numpy as np
import scipy.sparse as sp

from .core_utilities import as_csr
from .exceptions import InvalidGraphError

@dataclass
class CoarsenedLevel:
    level: int
    membership: np.ndarray             # shape (n_nodes_at_parent,), supernode index in [0..C-1]
    sizes: np.ndarray                  # parent nodes per supernode, shape (C,)
    A: sp.csr_matrix                   # coarse adjacency (C x C), zero diagonal
    w: np.ndarray                      # supernode weights, shape (C,)
    parent_level: Optional[int]        # None when built from the original graph
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def n_supernodes(self) -> int:
        return int(self.w.shape[0])


def _membership(labels: np.ndarray) -> Tuple[np.ndarray, int]:
    """Supernode index per node; supernodes follow increasing label order."""
    labels = np.asarray(labels)
    if labels.ndim != 1:
        raise InvalidGraphError(f"Labels must be a 1-D vector, got shape {labels.shape}")
    uniq, membership = np.unique(labels, return_inverse=True)
    return membership.astype(np.int64, copy=False), int(uniq.shape[0])


def collapse_clustering(A, w: np.ndarray, labels: np.ndarray) -> Tuple[sp.csr_matrix, np.ndarray]:
    """Collapse a clustering into a graph of supernodes (step 2 of Louvain).

    Supernode p stands for the p-th distinct label in increasing order. Its weight
    is the summed weight of its members, and the edge p--q (p != q) carries the
    total weight of original edges between the two member sets. Intra-cluster
    edges are dropped, so the coarse graph has a zero diagonal; the product
    S^T A S only touches cluster pairs that share an edge, so the result stays as
    sparse as the input.
    """
    A = as_csr(A)
    w = np.asarray(w, dtype=np.float64)
    n = A.shape[0]
    if w.shape[0] != n or np.asarray(labels).shape[0] != n:
        raise InvalidGraphError("Graph, node weights and labels must have matching sizes")

    membership, C = _membership(labels)
    S = sp.csr_matrix((np.ones(n), (np.arange(n), membership)), shape=(n, C))

    coarse = (S.T @ A @ S).tocsr()
    coarse = 0.5 * (coarse + coarse.T)   # exact symmetry despite summation order
    coarse = (coarse - sp.diags(coarse.diagonal(), format="csr")).tocsr()
    coarse.eliminate_zeros()
    coarse.sort_indices()

    w_new = np.bincount(membership, weights=w, minlength=C).astype(np.float64)
    return coarse, w_new


def coarsen_level(A, w: np.ndarray, labels: np.ndarray, level: int,
                  parent_level: Optional[int] = None,
                  params: Optional[Dict[str, Any]] = None) -> CoarsenedLevel:
    """Collapse a clustering and keep the node-to-supernode map with it."""
    A_new, w_new = collapse_clustering(A, w, labels)
    membership, C = _membership(labels)
    return CoarsenedLevel(
        level=level,
        membership=membership,
        sizes=np.bincount(membership, minlength=C),
        A=A_new,
        w=w_new,
        parent_level=parent_level,
        params=dict(params or {}),
    )


def expand_labels(super_labels: np.ndarray, membership: np.ndarray) -> np.ndarray:
    """Give every node the label of the supernode that contains it."""
    super_labels = np.asarray(super_labels, dtype=np.int64)
    membership = np.asarray(membership, dtype=np.int64)
    if membership.size and membership.max() >= super_labels.shape[0]:
        raise InvalidGraphError("Membership refers to a supernode without a label")
    return super_labels[membership]
