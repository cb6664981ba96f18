"""
Lambda Louvain - Multilevel Louvain clustering for the resolution-parameterized
correlation clustering (LambdaCC) objective, equivalent to modularity under degree
node weights.
"""

# Import main entry points for easy access
from .driver import (
    LouvainResult,
    cluster,
    cluster_best,
    modularity_louvain,
    multilevel_louvain,
    run_louvain,
    run_restarts,
)
from .config import LouvainConfig
from .exceptions import InvalidGraphError, InvalidParameterError, LouvainError

# Import building blocks that might be directly useful
from .adjacency import AdjacencyView, build_adjacency, graph_from_edges
from .bookkeeping import ClusterBookkeeping
from .local_search import PassContext, local_search_pass
from .coarsen import CoarsenedLevel, collapse_clustering, coarsen_level, expand_labels
from .objective import (
    compare_partitions,
    lambda_from_gamma,
    lamcc_objective,
    modularity,
    partition_summary,
)
from .core_utilities import PerformanceMonitor, cluster_sizes, clusters_from_labels

# Define what gets imported with `from lambda_louvain import *`
__all__ = [
    # Entry points
    'cluster',
    'cluster_best',
    'run_louvain',
    'run_restarts',
    'multilevel_louvain',
    'modularity_louvain',
    'LouvainConfig',
    'LouvainResult',

    # Errors
    'LouvainError',
    'InvalidGraphError',
    'InvalidParameterError',

    # Building blocks
    'AdjacencyView',
    'build_adjacency',
    'graph_from_edges',
    'ClusterBookkeeping',
    'PassContext',
    'local_search_pass',
    'CoarsenedLevel',
    'collapse_clustering',
    'coarsen_level',
    'expand_labels',

    # Objective and reporting
    'lamcc_objective',
    'lambda_from_gamma',
    'modularity',
    'partition_summary',
    'compare_partitions',
    'cluster_sizes',
    'clusters_from_labels',
    'PerformanceMonitor',
]

# Package metadata
__version__ = '1.0.0'
__author__ = 'Connor Frankston'
