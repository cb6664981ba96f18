"""Tests for adjacency views and edge-list graph assembly."""

from __future__ import annotations

import numpy as np
import pytest
import scipy.sparse as sp

from lambda_louvain.adjacency import build_adjacency, graph_from_edges
from lambda_louvain.exceptions import InvalidGraphError


def test_build_adjacency_lists_sorted_neighbors(two_triangles) -> None:
    adj = build_adjacency(two_triangles)

    assert adj.n_nodes == 6
    assert adj.neighbors(0).tolist() == [1, 2]
    assert adj.neighbors(4).tolist() == [3, 5]
    assert adj.n_neighbors.tolist() == [2, 2, 2, 2, 2, 2]
    assert [nbrs.tolist() for nbrs in adj.neighbor_lists()][3] == [4, 5]


def test_build_adjacency_ignores_zero_weights() -> None:
    # explicitly stored zero between 1 and 2
    A = sp.coo_matrix(
        ([2.0, 2.0, 0.0], ([0, 1, 1], [1, 0, 2])), shape=(3, 3)
    ).tocsr()

    adj = build_adjacency(A)

    assert adj.neighbors(0).tolist() == [1]
    assert adj.weights(0).tolist() == [2.0]
    assert adj.neighbors(2).tolist() == []
    assert adj.n_neighbors.tolist() == [1, 1, 0]


def test_graph_from_edges_sums_repeated_pairs() -> None:
    A = graph_from_edges([0, 2, 1], [1, 1, 0], [1.0, 0.5, 2.0], 3)

    dense = A.toarray()
    assert dense[0, 1] == pytest.approx(3.0)
    assert dense[1, 0] == pytest.approx(3.0)
    assert dense[1, 2] == pytest.approx(0.5)
    assert np.allclose(dense, dense.T)
    assert np.all(np.diag(dense) == 0)


def test_graph_from_edges_rejects_self_loops() -> None:
    with pytest.raises(InvalidGraphError):
        graph_from_edges([0, 1], [1, 1], None, 2)


def test_graph_from_edges_rejects_out_of_range_nodes() -> None:
    with pytest.raises(InvalidGraphError):
        graph_from_edges([0], [3], None, 3)


def test_build_adjacency_rejects_self_loops() -> None:
    A = sp.csr_matrix(np.array([[5.0, 2.0], [2.0, 0.0]]))
    with pytest.raises(InvalidGraphError):
        build_adjacency(A)
