"""Exceptions raised by the clustering engine."""


class LouvainError(Exception):
    """Base class for errors raised by lambda_louvain."""


class InvalidGraphError(LouvainError, ValueError):
    """Raised when the graph or node-weight vector violates a precondition.

    Covers asymmetric or non-square adjacency, nonzero diagonal entries,
    negative or non-finite weights, and node-weight vectors whose length
    does not match the number of nodes.
    """


class InvalidParameterError(LouvainError, ValueError):
    """Raised when a run parameter is out of range.

    Example:
        A resolution ``lam <= 0`` has no meaningful objective, so
        ``cluster(A, w, lam=0.0)`` raises this error before any work is done.
    """
