"""Tests for supernode collapse and label expansion."""

from __future__ import annotations

import numpy as np
import pytest

from lambda_louvain.adjacency import graph_from_edges
from lambda_louvain.coarsen import coarsen_level, collapse_clustering, expand_labels


def test_collapse_path_into_pairs(path4) -> None:
    A_new, w_new = collapse_clustering(path4, np.ones(4), np.array([1, 1, 2, 2]))

    assert A_new.shape == (2, 2)
    assert A_new.toarray().tolist() == [[0.0, 1.0], [1.0, 0.0]]
    assert w_new.tolist() == [2.0, 2.0]


def test_collapse_aggregates_weights_and_drops_internal_edges() -> None:
    A = graph_from_edges(
        [0, 0, 1, 2, 3, 1],
        [1, 2, 3, 3, 4, 4],
        [2.0, 1.0, 0.5, 3.0, 4.0, 0.25],
        5,
    )
    w = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    labels = np.array([1, 1, 2, 2, 3])

    A_new, w_new = collapse_clustering(A, w, labels)
    dense = A_new.toarray()

    assert w_new.tolist() == [3.0, 7.0, 5.0]
    assert np.all(np.diag(dense) == 0)
    assert dense[0, 1] == pytest.approx(1.0 + 0.5)   # 0-2 and 1-3
    assert dense[0, 2] == pytest.approx(0.25)        # 1-4
    assert dense[1, 2] == pytest.approx(4.0)         # 3-4
    assert np.allclose(dense, dense.T)


def test_collapse_only_materializes_adjacent_supernodes(two_triangles) -> None:
    A_new, w_new = collapse_clustering(two_triangles, np.ones(6), np.array([1, 1, 1, 2, 2, 2]))

    assert A_new.nnz == 0
    assert w_new.tolist() == [3.0, 3.0]


def test_collapse_accepts_non_contiguous_labels(path4) -> None:
    A_new, w_new = collapse_clustering(path4, np.ones(4), np.array([7, 7, 3, 3]))

    # supernodes follow increasing label order: label 3 first, then 7
    assert w_new.tolist() == [2.0, 2.0]
    assert A_new[0, 1] == pytest.approx(1.0)


def test_expanded_partition_recoarsens_to_same_graph() -> None:
    ring = graph_from_edges([0, 1, 2, 3, 4, 5], [1, 2, 3, 4, 5, 0], [1, 2, 3, 4, 5, 6], 6)
    w = np.arange(1.0, 7.0)
    labels = np.array([1, 1, 2, 2, 3, 3])

    level = coarsen_level(ring, w, labels, level=1)
    super_labels = np.array([1, 1, 2])
    expanded = expand_labels(super_labels, level.membership)

    A_two_step, w_two_step = collapse_clustering(level.A, level.w, super_labels)
    A_direct, w_direct = collapse_clustering(ring, w, expanded)

    assert expanded.tolist() == [1, 1, 1, 1, 2, 2]
    assert np.allclose(A_two_step.toarray(), A_direct.toarray())
    assert np.allclose(w_two_step, w_direct)


def test_coarsen_level_records_membership(path4) -> None:
    level = coarsen_level(path4, np.ones(4), np.array([2, 1, 1, 2]), level=1)

    assert level.membership.tolist() == [1, 0, 0, 1]
    assert level.sizes.tolist() == [2, 2]
    assert level.n_supernodes == 2
    assert level.parent_level is None
