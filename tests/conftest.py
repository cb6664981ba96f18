"""Pytest configuration and small graph fixtures for lambda_louvain."""

from __future__ import annotations

from pathlib import Path
import sys

import numpy as np
import pytest
import scipy.sparse as sp

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from lambda_louvain.adjacency import graph_from_edges  # noqa: E402


@pytest.fixture
def two_triangles() -> sp.csr_matrix:
    """Two disjoint unit-weight triangles on nodes 0-2 and 3-5."""
    return graph_from_edges([0, 0, 1, 3, 3, 4], [1, 2, 2, 4, 5, 5], None, 6)


@pytest.fixture
def path4() -> sp.csr_matrix:
    """Unit-weight path 0-1-2-3."""
    return graph_from_edges([0, 1, 2], [1, 2, 3], None, 4)


@pytest.fixture
def ring_of_cliques() -> sp.csr_matrix:
    """Four 5-cliques joined in a ring by single edges."""
    size, count = 5, 4
    sources, targets = [], []
    for c in range(count):
        base = c * size
        for i in range(size):
            for j in range(i + 1, size):
                sources.append(base + i)
                targets.append(base + j)
        sources.append(base + size - 1)
        targets.append(((c + 1) % count) * size)
    return graph_from_edges(sources, targets, None, size * count)


@pytest.fixture
def random_weighted_graph() -> sp.csr_matrix:
    """Seeded sparse random graph with positive weights."""
    rng = np.random.default_rng(2024)
    n = 30
    upper = sp.random(n, n, density=0.15, random_state=rng, format="csr")
    upper = sp.triu(upper, k=1)
    return (upper + upper.T).tocsr()
