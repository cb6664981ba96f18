"""Tests for input validation at the clustering entry points."""

from __future__ import annotations

import numpy as np
import pytest
import scipy.sparse as sp

from lambda_louvain import (
    InvalidGraphError,
    InvalidParameterError,
    LouvainConfig,
    cluster,
    cluster_best,
)


def test_rejects_asymmetric_graph() -> None:
    A = np.array([[0.0, 1.0], [0.0, 0.0]])
    with pytest.raises(InvalidGraphError):
        cluster(A, np.ones(2), lam=1.0)


def test_rejects_nonzero_diagonal() -> None:
    A = sp.csr_matrix(np.array([[1.0, 1.0], [1.0, 0.0]]))
    with pytest.raises(InvalidGraphError):
        cluster(A, np.ones(2), lam=1.0)


def test_rejects_negative_weights() -> None:
    A = np.array([[0.0, -1.0], [-1.0, 0.0]])
    with pytest.raises(InvalidGraphError):
        cluster(A, np.ones(2), lam=1.0)


def test_rejects_non_square_graph() -> None:
    with pytest.raises(InvalidGraphError):
        cluster(np.zeros((2, 3)), np.ones(2), lam=1.0)


def test_rejects_weight_length_mismatch(path4) -> None:
    with pytest.raises(InvalidGraphError):
        cluster(path4, np.ones(3), lam=1.0)


def test_rejects_negative_node_weights(path4) -> None:
    with pytest.raises(InvalidGraphError):
        cluster(path4, np.array([1.0, -1.0, 1.0, 1.0]), lam=1.0)


@pytest.mark.parametrize("lam", [0.0, -0.5, float("nan"), float("inf")])
def test_rejects_degenerate_resolution(path4, lam) -> None:
    with pytest.raises(InvalidParameterError):
        cluster(path4, np.ones(4), lam=lam)


def test_rejects_bad_run_parameters(path4) -> None:
    with pytest.raises(InvalidParameterError):
        cluster(path4, np.ones(4), lam=1.0, max_iterations=0)
    with pytest.raises(InvalidParameterError):
        cluster(path4, np.ones(4), lam=1.0, cluster_penalty=-1.0)
    with pytest.raises(InvalidParameterError):
        cluster_best(path4, np.ones(4), lam=1.0, n_restarts=0)
    with pytest.raises(InvalidParameterError):
        LouvainConfig(n_jobs=0).validate()


def test_errors_are_value_errors() -> None:
    assert issubclass(InvalidGraphError, ValueError)
    assert issubclass(InvalidParameterError, ValueError)
