"""
Multilevel driver for the LambdaLouvain method.

The driver alternates the greedy local-search pass with collapsing the resulting
clusters into supernodes, and keeps the node-level partition found after every
round that improved. It also hosts the public entry points ``cluster`` (one
multilevel run) and ``cluster_best`` (best of several randomized runs).
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from .adjacency import build_adjacency
from .coarsen import coarsen_level, expand_labels
from .config import LouvainConfig
from .core_utilities import (
    PerformanceMonitor,
    degree_weights,
    validate_graph,
    validate_node_weights,
)
from .local_search import PassContext, local_search_pass
from .objective import lambda_from_gamma, lamcc_objective

ProgressSink = Callable[[str, Dict[str, Any]], None]


@dataclass
class LouvainResult:
    """Outcome of one multilevel run."""
    labels: np.ndarray                  # final partition over the original nodes, values 1..K
    objective: float                    # LambdaCC objective of ``labels`` (lower is better)
    levels: List[np.ndarray]            # node-level partition after every successful round
    level_objectives: List[float]       # objective of each entry of ``levels``
    supernodes: List[int]               # graph size seen by each local-search round
    params: Dict[str, Any] = field(default_factory=dict)
    timing: Dict[str, Dict[str, float]] = field(default_factory=dict)

    @property
    def n_clusters(self) -> int:
        return int(self.labels.max()) if self.labels.size else 0

    @property
    def n_levels(self) -> int:
        return len(self.levels)


def _emit(progress: Optional[ProgressSink], event: str, **info) -> None:
    if progress is not None:
        progress(event, info)


def _prepare_inputs(graph, node_weights) -> Tuple[Any, np.ndarray]:
    """Validate the graph once and resolve default (degree) node weights."""
    A = validate_graph(graph)
    if node_weights is None:
        w = degree_weights(A)
    else:
        w = validate_node_weights(node_weights, A.shape[0])
    return A, w


def _run_validated(A, w: np.ndarray, config: LouvainConfig,
                   rng: np.random.Generator,
                   progress: Optional[ProgressSink] = None) -> LouvainResult:
    monitor = PerformanceMonitor()
    verbose = config.verbose
    lam = float(config.resolution)

    levels: List[np.ndarray] = []
    level_objectives: List[float] = []
    supernodes: List[int] = []

    A_level, w_level = A, w
    membership = None                  # original node -> supernode of the current level
    level = 0

    while True:
        # local search on the current graph
        n_level = A_level.shape[0]
        supernodes.append(n_level)
        context = PassContext(n_clusters=n_level)
        with monitor.timed_operation(f"local search (level {level})", verbose=verbose):
            adjacency = build_adjacency(A_level)
            super_labels, improved = local_search_pass(
                adjacency, w_level, lam,
                cluster_penalty=config.cluster_penalty,
                max_iterations=config.max_iterations,
                randomize=config.randomize,
                rng=rng,
                context=context,
            )
        _emit(progress, "pass", level=level, n_nodes=n_level,
              iterations=context.iterations, moves=context.n_moves,
              clusters=context.n_clusters, improved=improved)
        if verbose:
            print(f"Level {level}: {n_level:,} nodes -> {context.n_clusters:,} clusters "
                  f"({context.n_moves:,} moves in {context.iterations} sweeps)")
        if context.hit_iteration_cap:
            _emit(progress, "iteration_cap", level=level, iterations=context.iterations)
            if verbose:
                print(f"  Level {level} stopped at the iteration cap ({config.max_iterations})")

        if level == 0:
            labels = super_labels
        elif improved:
            labels = expand_labels(super_labels, membership)
        else:
            break

        with monitor.timed_operation("objective"):
            objective = lamcc_objective(A, labels, w, lam, config.cluster_penalty)
        levels.append(labels)
        level_objectives.append(objective)

        if not improved:
            break
        _emit(progress, "level", level=level, clusters=int(labels.max()), objective=objective)

        # collapse into supernodes and go again on the reduced graph
        with monitor.timed_operation(f"coarsen (level {level})", verbose=verbose):
            coarse = coarsen_level(A_level, w_level, super_labels, level=level + 1,
                                   parent_level=level if level > 0 else None)
        membership = coarse.membership if membership is None else coarse.membership[membership]
        A_level, w_level = coarse.A, coarse.w
        level += 1

    if verbose:
        monitor.print_timing_summary()

    return LouvainResult(
        labels=levels[-1],
        objective=level_objectives[-1],
        levels=levels,
        level_objectives=level_objectives,
        supernodes=supernodes,
        params=config.to_dict(),
        timing=monitor.summary(),
    )


def run_louvain(graph, node_weights=None, config: Optional[LouvainConfig] = None,
                progress: Optional[ProgressSink] = None, **overrides) -> LouvainResult:
    """
    Single multilevel LambdaLouvain run.

    Parameters:
    -----------
    graph : scipy.sparse matrix or array-like
        Symmetric, non-negative weighted adjacency matrix with zero diagonal
    node_weights : array-like of float, optional
        Weight per node; defaults to the weighted degree
    config : LouvainConfig, optional
        Run parameters; keyword ``overrides`` replace individual fields
    progress : callable, optional
        ``progress(event, info)`` sink. Events are ``"pass"`` after every
        local-search pass, ``"iteration_cap"`` when a pass stops at
        ``max_iterations`` while still moving nodes, and ``"level"`` after every
        round that improved the partition

    Returns:
    --------
    LouvainResult
    """
    config = _resolve_config(config, overrides)
    A, w = _prepare_inputs(graph, node_weights)
    rng = np.random.default_rng(config.random_state)
    return _run_validated(A, w, config, rng, progress)


def multilevel_louvain(graph, node_weights, lam, randomize=False, max_iterations=10000,
                       cluster_penalty=0.0, random_state=None, verbose=False,
                       progress=None) -> List[np.ndarray]:
    """Partition after every successful round; the last entry is the final clustering."""
    result = run_louvain(
        graph, node_weights, resolution=lam, randomize=randomize,
        max_iterations=max_iterations, cluster_penalty=cluster_penalty,
        random_state=random_state, verbose=verbose, progress=progress,
    )
    return result.levels


def cluster(graph, node_weights, lam, randomize=False, max_iterations=10000,
            cluster_penalty=0.0, random_state=None, verbose=False,
            progress=None) -> Tuple[np.ndarray, float]:
    """
    Cluster a graph with one multilevel LambdaLouvain run.

    Returns the final label vector (values ``1..K``) and its objective value.
    """
    result = run_louvain(
        graph, node_weights, resolution=lam, randomize=randomize,
        max_iterations=max_iterations, cluster_penalty=cluster_penalty,
        random_state=random_state, verbose=verbose, progress=progress,
    )
    return result.labels, result.objective


def run_restarts(graph, node_weights=None, config: Optional[LouvainConfig] = None,
                 progress: Optional[ProgressSink] = None, **overrides) -> List[LouvainResult]:
    """
    Independent multilevel runs, one per restart, in restart order.

    Every restart draws from its own child of ``SeedSequence(random_state)``, so
    the results do not depend on how restarts are scheduled over ``n_jobs``
    worker threads. The progress sink may be called from several threads.
    """
    config = _resolve_config(config, overrides)
    A, w = _prepare_inputs(graph, node_weights)
    seeds = np.random.SeedSequence(config.random_state).spawn(int(config.n_restarts))

    def _one(k):
        result = _run_validated(A, w, config, np.random.default_rng(seeds[k]), progress)
        _emit(progress, "restart", restart=k, objective=result.objective,
              clusters=result.n_clusters)
        return result

    results: List[Optional[LouvainResult]] = [None] * len(seeds)
    if config.n_jobs == 1 or len(seeds) == 1:
        for k in range(len(seeds)):
            results[k] = _one(k)
    else:
        with ThreadPoolExecutor(max_workers=int(config.n_jobs)) as pool:
            futures = {pool.submit(_one, k): k for k in range(len(seeds))}
            for future in as_completed(futures):
                results[futures[future]] = future.result()

    if config.verbose:
        objectives = [r.objective for r in results]
        print(f"{len(results)} restarts: objective min {min(objectives):.6g}, "
              f"max {max(objectives):.6g}")
    return results


def cluster_best(graph, node_weights, lam, n_restarts, max_iterations=10000,
                 cluster_penalty=0.0, random_state=None, n_jobs=1, verbose=False,
                 progress=None) -> Tuple[np.ndarray, float]:
    """
    Best of ``n_restarts`` randomized multilevel runs.

    Every restart visits nodes in random order; the partition with the lowest
    objective is returned, ties going to the earliest restart.
    """
    results = run_restarts(
        graph, node_weights, resolution=lam, randomize=True, n_restarts=n_restarts,
        max_iterations=max_iterations, cluster_penalty=cluster_penalty,
        random_state=random_state, n_jobs=n_jobs, verbose=verbose, progress=progress,
    )
    best = min(range(len(results)), key=lambda k: (results[k].objective, k))
    return results[best].labels, results[best].objective


def modularity_louvain(graph, gamma=1.0, randomize=False, max_iterations=10000,
                       cluster_penalty=0.0, random_state=None, verbose=False) -> np.ndarray:
    """
    Modularity clustering at resolution ``gamma``.

    Node weights are weighted degrees and ``lam = gamma / vol(G)``; ``gamma = 1``
    greedily optimizes standard modularity, larger values give more clusters.
    """
    A = validate_graph(graph)
    lam = lambda_from_gamma(A, gamma)
    labels, _ = cluster(
        A, degree_weights(A), lam, randomize=randomize, max_iterations=max_iterations,
        cluster_penalty=cluster_penalty, random_state=random_state, verbose=verbose,
    )
    return labels


def _resolve_config(config: Optional[LouvainConfig], overrides: Dict[str, Any]) -> LouvainConfig:
    base = config.to_dict() if config is not None else {}
    base.update(overrides)
    return LouvainConfig(**base).validate()
