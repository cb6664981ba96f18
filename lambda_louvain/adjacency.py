"""
Adjacency views over symmetric weighted sparse graphs.
"""
from dataclasses import dataclass

import numpy as np
import numba as nb
from scipy import sparse

from .core_utilities import as_csr
from .exceptions import InvalidGraphError


@dataclass(frozen=True)
class AdjacencyView:
    """
    Per-node neighbor lists of a graph, stored as CSR arrays.

    Row ``i`` of (``indptr``, ``indices``, ``data``) lists the distinct neighbors
    of node ``i`` in increasing order together with the edge weights.
    ``n_neighbors[i]`` is the unweighted degree (neighbor count) of node ``i``.
    """
    indptr: np.ndarray
    indices: np.ndarray
    data: np.ndarray
    n_neighbors: np.ndarray

    @property
    def n_nodes(self):
        return self.n_neighbors.shape[0]

    def neighbors(self, i):
        """Sorted neighbor ids of node ``i``."""
        return self.indices[self.indptr[i]:self.indptr[i + 1]]

    def weights(self, i):
        """Edge weights aligned with ``neighbors(i)``."""
        return self.data[self.indptr[i]:self.indptr[i + 1]]

    def neighbor_lists(self):
        return [self.neighbors(i) for i in range(self.n_nodes)]


def build_adjacency(graph):
    """
    Build the adjacency view of a graph.

    The view has to be rebuilt whenever the graph changes, i.e. once per
    coarsening level. Zero-weight entries are not neighbors; self-loops are
    rejected.

    Parameters:
    -----------
    graph : scipy.sparse matrix or array-like
        Symmetric weighted adjacency matrix

    Returns:
    --------
    AdjacencyView
    """
    A = as_csr(graph)
    if A.shape[0] != A.shape[1]:
        raise InvalidGraphError(f"Graph must be square, got shape {A.shape}")
    if A.nnz and np.any(A.diagonal() != 0):
        raise InvalidGraphError("Graph has nonzero diagonal entries (self-loops)")

    indptr = A.indptr.astype(np.int64)
    indices = A.indices.astype(np.int64)
    data = A.data.astype(np.float64)
    return AdjacencyView(
        indptr=indptr,
        indices=indices,
        data=data,
        n_neighbors=np.diff(indptr),
    )


@nb.njit(cache=True)
def _build_csr_arrays_from_pairs(a, b, w, n):
    # a < b for every pair; duplicates are summed afterwards by scipy
    deg = np.zeros(n, np.int64)
    m = a.size
    for i in range(m):
        deg[a[i]] += 1
        deg[b[i]] += 1

    indptr = np.empty(n + 1, np.int64)
    indptr[0] = 0
    for i in range(n):
        indptr[i + 1] = indptr[i] + deg[i]

    nnz = indptr[n]
    indices = np.empty(nnz, np.int64)
    data = np.empty(nnz, np.float64)

    cursor = indptr[:-1].copy()
    for i in range(m):
        u = a[i]; v = b[i]; wt = w[i]
        pu = cursor[u]; indices[pu] = v; data[pu] = wt; cursor[u] = pu + 1
        pv = cursor[v]; indices[pv] = u; data[pv] = wt; cursor[v] = pv + 1

    return indptr, indices, data


def graph_from_edges(sources, targets, weights, n_nodes):
    """
    Assemble a symmetric CSR graph from an undirected edge list.

    Each pair is stored once per direction; repeated pairs (in either
    orientation) accumulate their weights.

    Parameters:
    -----------
    sources, targets : array-like of int
        Edge endpoints, node ids in ``0..n_nodes-1``
    weights : array-like of float or None
        Non-negative edge weights; ``None`` means weight 1 for every edge
    n_nodes : int
        Number of nodes in the graph

    Returns:
    --------
    scipy.sparse.csr_matrix
        Symmetric float64 adjacency with zero diagonal
    """
    a = np.asarray(sources, dtype=np.int64).ravel()
    b = np.asarray(targets, dtype=np.int64).ravel()
    if weights is None:
        w = np.ones(a.shape[0], dtype=np.float64)
    else:
        w = np.asarray(weights, dtype=np.float64).ravel()
    n = int(n_nodes)

    if a.shape != b.shape or a.shape != w.shape:
        raise InvalidGraphError("sources, targets and weights must have the same length")
    if a.size and (min(a.min(), b.min()) < 0 or max(a.max(), b.max()) >= n):
        raise InvalidGraphError(f"Edge endpoints must lie in [0, {n - 1}]")
    if np.any(a == b):
        raise InvalidGraphError("Self-loops are not allowed")
    if not np.all(np.isfinite(w)) or np.any(w < 0):
        raise InvalidGraphError("Edge weights must be finite and non-negative")

    lo = np.minimum(a, b)
    hi = np.maximum(a, b)
    indptr, indices, data = _build_csr_arrays_from_pairs(lo, hi, w, n)

    A = sparse.csr_matrix((data, indices, indptr), shape=(n, n))
    A.sum_duplicates()
    A.eliminate_zeros()
    A.sort_indices()
    return A
