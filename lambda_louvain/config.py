# lambda_louvain/config.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import numpy as np

from .exceptions import InvalidParameterError

@dataclass
class LouvainConfig:
    resolution: float = 1.0            # lam; multiply a modularity gamma by 1/vol(G) to get it
    randomize: bool = False            # random node-visit order in every local-search pass
    max_iterations: int = 10000        # sweeps per local-search pass
    cluster_penalty: float = 0.0       # >0 favours fewer clusters
    n_restarts: int = 1                # independent multilevel runs, best objective kept
    random_state: Optional[int] = None
    n_jobs: int = 1                    # worker threads for restarts
    verbose: bool = False

    def validate(self) -> "LouvainConfig":
        if not np.isfinite(self.resolution) or self.resolution <= 0:
            raise InvalidParameterError(f"resolution must be positive and finite, got {self.resolution}")
        if int(self.max_iterations) < 1:
            raise InvalidParameterError(f"max_iterations must be at least 1, got {self.max_iterations}")
        if not np.isfinite(self.cluster_penalty) or self.cluster_penalty < 0:
            raise InvalidParameterError(f"cluster_penalty must be non-negative, got {self.cluster_penalty}")
        if int(self.n_restarts) < 1:
            raise InvalidParameterError(f"n_restarts must be at least 1, got {self.n_restarts}")
        if int(self.n_jobs) < 1:
            raise InvalidParameterError(f"n_jobs must be at least 1, got {self.n_jobs}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
