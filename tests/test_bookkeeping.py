"""Tests for cluster bookkeeping."""

from __future__ import annotations

import numpy as np
import pytest

from lambda_louvain.bookkeeping import ClusterBookkeeping


def _assert_consistent(book: ClusterBookkeeping) -> None:
    for cluster, members in enumerate(book.cluster_members):
        for node in members:
            assert book.cluster_of(node) == cluster
    assert sum(len(m) for m in book.cluster_members) == book.n_nodes
    assert book.n_clusters == sum(1 for m in book.cluster_members if m)


def test_starts_as_singletons() -> None:
    book = ClusterBookkeeping(np.array([1.0, 2.0, 3.0]))

    assert book.labels.tolist() == [0, 1, 2]
    assert book.members(1) == [1]
    assert book.n_clusters == 3
    _assert_consistent(book)


def test_move_updates_labels_members_and_weights() -> None:
    book = ClusterBookkeeping(np.array([1.0, 2.0, 3.0, 4.0]))

    assert book.move(0, 0, 1) is True
    assert book.move(2, 2, 1) is True
    assert book.move(2, 1, 3) is False

    assert book.cluster_of(2) == 3
    assert sorted(book.members(1)) == [0, 1]
    assert sorted(book.members(3)) == [2, 3]
    assert book.members(0) == []
    assert book.cluster_weight[1] == pytest.approx(3.0)
    assert book.cluster_weight[3] == pytest.approx(7.0)
    assert book.cluster_weight[0] == 0.0
    assert book.n_clusters == 2
    _assert_consistent(book)


def test_move_from_wrong_cluster_raises() -> None:
    book = ClusterBookkeeping(np.ones(3))
    with pytest.raises(ValueError):
        book.move(0, 2, 1)


def test_renumber_is_dense_and_ordered_by_cluster_id() -> None:
    book = ClusterBookkeeping(np.ones(5))
    book.move(4, 4, 2)
    book.move(0, 0, 3)
    book.move(1, 1, 3)

    labels, clusters = book.renumber()

    assert labels.tolist() == [2, 2, 1, 2, 1]
    assert clusters == [[2, 4], [0, 1, 3]]
