"""
Greedy local node-moving pass of the Louvain method (step 1).

For the objective

    sum of cut edge weight + lam * sum of w_i * w_j over same-cluster pairs

moving node ``i`` from cluster ``Ci`` to cluster ``Cj`` changes the objective by

    (lam * w_i * W(Cj) - A(i, Cj)) + (A(i, Ci) - lam * w_i * (W(Ci) - w_i))

where ``W(C)`` is the summed node weight of ``C`` and ``A(i, C)`` the edge mass
from ``i`` into ``C``. Only clusters adjacent to ``i`` are candidates.
"""
from dataclasses import dataclass

import numpy as np
import numba as nb

from .adjacency import AdjacencyView, build_adjacency
from .bookkeeping import ClusterBookkeeping
from .core_utilities import validate_node_weights, validate_resolution
from .exceptions import InvalidParameterError


@dataclass
class PassContext:
    """Mutable state threaded through the sweeps of one local-search pass."""
    n_clusters: int
    iterations: int = 0
    n_moves: int = 0
    improved: bool = False
    hit_iteration_cap: bool = False


@nb.njit(cache=True, nogil=True)
def _best_move(i, indptr, indices, data, labels, w, cluster_weight,
               lam, delta_clus, mass, seen, found):
    """
    Best destination cluster for node ``i`` and the objective change of the move.

    ``mass`` and ``seen`` are scratch arrays indexed by cluster id, all zero on
    entry and reset before returning. Candidate clusters are scanned in the order
    they are discovered among the (sorted) neighbors of ``i``; the first one
    reaching the most negative change wins.
    """
    ci = labels[i]
    n_found = 0
    for p in range(indptr[i], indptr[i + 1]):
        c = labels[indices[p]]
        if seen[c] == 0:
            seen[c] = 1
            found[n_found] = c
            n_found += 1
        mass[c] += data[p]

    wi = w[i]
    pos_inner = mass[ci]
    total_inner = pos_inner - lam * wi * (cluster_weight[ci] - wi)

    best_change = 0.0
    best_cluster = ci
    for k in range(n_found):
        cj = found[k]
        if cj == ci:
            continue
        total_outer = lam * wi * cluster_weight[cj] - mass[cj]
        change = total_outer + total_inner + delta_clus
        if change < best_change:
            best_change = change
            best_cluster = cj

    for k in range(n_found):
        c = found[k]
        seen[c] = 0
        mass[c] = 0.0
    return best_cluster, best_change


def local_search_pass(graph, node_weights, lam, cluster_penalty=0.0,
                      max_iterations=10000, randomize=False, rng=None,
                      context=None, verbose=False):
    """
    Run greedy node moves from the all-singleton partition until no move helps.

    Parameters:
    -----------
    graph : AdjacencyView, scipy.sparse matrix or array-like
        Symmetric weighted graph. Passing a prebuilt AdjacencyView skips the
        conversion.
    node_weights : numpy.ndarray
        Node weight per node
    lam : float
        Resolution parameter, must be positive
    cluster_penalty : float, default=0.0
        Objective bonus ``cluster_penalty * (log(K-1) - log(K))`` credited when a
        singleton cluster disbands
    max_iterations : int, default=10000
        Maximum number of full sweeps over the nodes
    randomize : bool, default=False
        Visit nodes in a random permutation (fixed for the whole pass) instead of
        natural order
    rng : numpy.random.Generator, optional
        Source of the permutation when ``randomize`` is set
    context : PassContext, optional
        Filled in with sweep statistics when given
    verbose : bool, default=False
        Print a line per sweep

    Returns:
    --------
    labels : numpy.ndarray
        Label vector with values ``1..K``
    improved : bool
        Whether at least one node changed cluster
    """
    adj = graph if isinstance(graph, AdjacencyView) else build_adjacency(graph)
    lam = validate_resolution(lam)
    if cluster_penalty < 0:
        raise InvalidParameterError(f"cluster_penalty must be non-negative, got {cluster_penalty}")
    if max_iterations < 1:
        raise InvalidParameterError(f"max_iterations must be at least 1, got {max_iterations}")

    n = adj.n_nodes
    w = validate_node_weights(node_weights, n)
    book = ClusterBookkeeping(w)
    if context is None:
        context = PassContext(n_clusters=n)
    else:
        context.n_clusters = n

    if randomize:
        if rng is None:
            rng = np.random.default_rng()
        order = rng.permutation(n)
    else:
        order = np.arange(n)

    mass = np.zeros(n, dtype=np.float64)
    seen = np.zeros(n, dtype=np.int8)
    found = np.empty(max(n, 1), dtype=np.int64)

    improving = True
    while improving and context.iterations < max_iterations:
        context.iterations += 1
        improving = False
        sweep_moves = 0

        for i in order:
            ci = book.labels[i]
            singleton = book.cluster_size(ci) == 1
            K = book.n_clusters
            if singleton and cluster_penalty > 0 and K > 1:
                delta_clus = cluster_penalty * (np.log(K - 1) - np.log(K))
            else:
                delta_clus = 0.0

            best_cluster, best_change = _best_move(
                i, adj.indptr, adj.indices, adj.data, book.labels, w,
                book.cluster_weight, lam, delta_clus, mass, seen, found
            )
            if best_change < 0:
                book.move(i, ci, best_cluster)
                sweep_moves += 1
                improving = True

        context.n_moves += sweep_moves
        context.n_clusters = book.n_clusters
        if sweep_moves:
            context.improved = True
        if verbose:
            print(f"    sweep {context.iterations}: {sweep_moves} moves, {book.n_clusters} clusters")

    context.hit_iteration_cap = improving and context.iterations >= max_iterations

    labels, _ = book.renumber()
    return labels, context.improved
