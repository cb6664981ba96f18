"""
Cluster bookkeeping for a single local-search pass.
"""
import numpy as np


class ClusterBookkeeping:
    """
    Current partition kept as a label vector and explicit member lists.

    Cluster ids are ``0..n-1`` while a pass is running (every node starts in its
    own singleton cluster ``i``); ids of emptied clusters are simply left unused
    until :meth:`renumber` compacts them. The summed node weight of every cluster
    is maintained alongside so that move evaluation never has to rescan members.

    Moves must go through :meth:`move`; the arrays exposed for read-only use by
    the move-evaluation kernel are ``labels`` and ``cluster_weight``.
    """

    def __init__(self, node_weights):
        w = np.asarray(node_weights, dtype=np.float64)
        n = w.shape[0]
        self.node_weights = w
        self.labels = np.arange(n, dtype=np.int64)
        self.cluster_weight = w.copy()
        self.cluster_members = [[i] for i in range(n)]
        self.n_clusters = n

    @property
    def n_nodes(self):
        return self.labels.shape[0]

    def cluster_of(self, node):
        return int(self.labels[node])

    def members(self, cluster):
        return self.cluster_members[cluster]

    def cluster_size(self, cluster):
        return len(self.cluster_members[cluster])

    def move(self, node, from_cluster, to_cluster):
        """
        Move ``node`` from ``from_cluster`` to ``to_cluster``.

        Returns True when the move emptied ``from_cluster``.
        """
        if self.labels[node] != from_cluster:
            raise ValueError(
                f"Node {node} is in cluster {self.labels[node]}, not {from_cluster}"
            )
        if from_cluster == to_cluster:
            return False

        self.cluster_members[from_cluster].remove(node)
        self.cluster_members[to_cluster].append(node)
        self.labels[node] = to_cluster

        wi = self.node_weights[node]
        self.cluster_weight[to_cluster] += wi
        disbanded = not self.cluster_members[from_cluster]
        if disbanded:
            self.cluster_weight[from_cluster] = 0.0
            self.n_clusters -= 1
        else:
            self.cluster_weight[from_cluster] -= wi
        return disbanded

    def renumber(self):
        """
        Dense relabeling of the non-empty clusters.

        Clusters are visited in increasing id order and assigned ids ``1..K``.

        Returns:
        --------
        labels : numpy.ndarray
            Label vector with values in ``1..K``
        clusters : list of list
            ``clusters[k - 1]`` holds the sorted members of cluster ``k``
        """
        new_id = np.zeros(len(self.cluster_members), dtype=np.int64)
        clusters = []
        for cluster, members in enumerate(self.cluster_members):
            if members:
                clusters.append(sorted(members))
                new_id[cluster] = len(clusters)
        return new_id[self.labels], clusters
