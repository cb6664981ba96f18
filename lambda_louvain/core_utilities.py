"""
Core utilities for the lambda_louvain package.
Contains timing helpers, input coercion/validation and small partition helpers
shared across modules.
"""
import time
from collections import defaultdict
from contextlib import contextmanager

import numpy as np
from scipy import sparse

from .exceptions import InvalidGraphError, InvalidParameterError

# Relative tolerance used when checking symmetry of weighted graphs
SYMMETRY_RTOL = 1e-12


class PerformanceMonitor:
    """Per-run timing statistics with minimal overhead."""

    def __init__(self, enabled=True):
        self.enabled = enabled
        self.reset()

    def reset(self):
        """Reset all timing statistics."""
        self.timing_stats = defaultdict(float)
        self.timing_counts = defaultdict(int)
        self.total_start_time = time.time()

    @contextmanager
    def timed_operation(self, operation_name, verbose=False):
        """Context manager accumulating the wall-clock time of an operation."""
        if not self.enabled:
            yield
            return

        start_time = time.time()
        try:
            yield
        finally:
            elapsed = time.time() - start_time
            self.timing_stats[operation_name] += elapsed
            self.timing_counts[operation_name] += 1
            if verbose:
                print(f"  [{operation_name}] completed in {elapsed:.3f} seconds")

    def summary(self):
        """
        Timing table as a plain dictionary.

        Returns:
        --------
        dict
            ``{operation: {'total': seconds, 'count': calls, 'mean': seconds}}``
        """
        result = {}
        for operation, elapsed in self.timing_stats.items():
            count = self.timing_counts[operation]
            result[operation] = {
                'total': elapsed,
                'count': count,
                'mean': elapsed / count if count > 0 else 0.0,
            }
        return result

    def print_timing_summary(self):
        """Print a summary of timing statistics."""
        if not self.enabled:
            return

        total_time = time.time() - self.total_start_time

        print("\n======== TIMING SUMMARY ========")
        print(f"Total execution time: {total_time:.3f} seconds")
        print("\nBreakdown by operation:")

        sorted_ops = sorted(self.timing_stats.items(), key=lambda x: x[1], reverse=True)
        for operation, elapsed in sorted_ops:
            percentage = (elapsed / total_time) * 100 if total_time > 0 else 0.0
            count = self.timing_counts[operation]
            avg_time = elapsed / count if count > 0 else 0
            print(f"  {operation:<30} {elapsed:10.3f}s ({percentage:6.2f}%)  |  {count} calls, avg {avg_time:.4f}s per call")

        print("================================")


def as_csr(graph):
    """
    Convert a sparse matrix or dense array-like to canonical float64 CSR.

    Duplicate entries are summed, column indices are sorted within each row and
    explicitly stored zeros are removed, so that the stored pattern of each row is
    exactly the set of neighbors of that node.
    """
    if sparse.issparse(graph):
        csr = sparse.csr_matrix(graph, dtype=np.float64, copy=True)
    else:
        dense = np.asarray(graph, dtype=np.float64)
        if dense.ndim != 2:
            raise InvalidGraphError(f"Graph must be 2-dimensional, got shape {dense.shape}")
        csr = sparse.csr_matrix(dense)
    csr.sum_duplicates()
    csr.eliminate_zeros()
    csr.sort_indices()
    return csr


def validate_graph(graph):
    """
    Check that a graph is a valid input for clustering.

    Parameters:
    -----------
    graph : scipy.sparse matrix or array-like
        Weighted adjacency matrix

    Returns:
    --------
    scipy.sparse.csr_matrix
        Canonical CSR copy of the graph

    Raises:
    -------
    InvalidGraphError
        If the graph is not square, not symmetric, has a nonzero diagonal, or
        contains negative or non-finite weights.
    """
    A = as_csr(graph)
    n_rows, n_cols = A.shape
    if n_rows != n_cols:
        raise InvalidGraphError(f"Graph must be square, got shape {A.shape}")

    if A.nnz == 0:
        return A

    if not np.all(np.isfinite(A.data)):
        raise InvalidGraphError("Graph contains non-finite edge weights")
    if np.any(A.data < 0):
        raise InvalidGraphError("Graph contains negative edge weights")
    if np.any(A.diagonal() != 0):
        raise InvalidGraphError("Graph has nonzero diagonal entries (self-loops)")

    asymmetry = abs(A - A.T)
    if asymmetry.nnz > 0:
        scale = max(1.0, float(A.data.max()))
        if asymmetry.max() > SYMMETRY_RTOL * scale:
            raise InvalidGraphError("Graph is not symmetric")
    return A


def validate_node_weights(node_weights, n_nodes):
    """Coerce node weights to float64 and check them against the node count."""
    w = np.asarray(node_weights, dtype=np.float64)
    if w.ndim != 1:
        raise InvalidGraphError(f"Node weights must be a 1-D vector, got shape {w.shape}")
    if w.shape[0] != n_nodes:
        raise InvalidGraphError(
            f"Node weight vector has length {w.shape[0]}, expected {n_nodes}"
        )
    if not np.all(np.isfinite(w)):
        raise InvalidGraphError("Node weights must be finite")
    if np.any(w < 0):
        raise InvalidGraphError("Node weights must be non-negative")
    return w.copy()


def validate_resolution(lam):
    """Return ``lam`` as a float, rejecting non-positive or non-finite values."""
    lam = float(lam)
    if not np.isfinite(lam) or lam <= 0:
        raise InvalidParameterError(f"Resolution parameter must be positive and finite, got {lam}")
    return lam


def degree_weights(graph):
    """Weighted degree of every node (row sums of the adjacency matrix)."""
    return np.asarray(graph.sum(axis=1), dtype=np.float64).ravel()


def clusters_from_labels(labels):
    """
    Member lists of a partition.

    Parameters:
    -----------
    labels : array-like of int
        Cluster label per node, values in ``1..K``

    Returns:
    --------
    list of numpy.ndarray
        Entry ``k`` holds the (sorted) node indices carrying label ``k + 1``
    """
    labels = np.asarray(labels, dtype=np.int64)
    if labels.size == 0:
        return []
    n_clusters = int(labels.max())
    order = np.argsort(labels, kind='stable')
    bounds = np.searchsorted(labels[order], np.arange(1, n_clusters + 2))
    return [order[bounds[k]:bounds[k + 1]] for k in range(n_clusters)]


def cluster_sizes(labels):
    """Cluster sizes of a partition, largest first."""
    labels = np.asarray(labels, dtype=np.int64)
    if labels.size == 0:
        return np.zeros(0, dtype=np.int64)
    _, counts = np.unique(labels, return_counts=True)
    return np.sort(counts)[::-1]
