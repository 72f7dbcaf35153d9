"""
Undirected multigraph stored as a dense matrix of edge multiplicities.

Every node has a string label and a dense identifier (its index in ``nodes``),
and ``adjacency[i][j]`` counts the parallel edges between nodes ``i`` and ``j``.
Contracting an edge replaces its two endpoints with a single node whose label
joins theirs with ``JOIN_DELIMITER``; the set of original labels absorbed by a
node is kept in ``clusters`` so callers never have to split names.
"""
import numpy
import networkx
import scipy.sparse

JOIN_DELIMITER = "_"


class MultigraphError(ValueError):
    pass


class DuplicateLabel(MultigraphError):
    """A node with this label already exists."""


class InvalidEdge(MultigraphError):
    """Self-edges, self-contractions and malformed adjacency input."""


def as_generator(rng=None):
    # default_rng hands an existing Generator back untouched
    return numpy.random.default_rng(rng)


class Multigraph:
    def __init__(self):
        self.nodes = []
        self.label_to_id = {}
        self.clusters = []
        self.adjacency = numpy.zeros((0, 0), dtype=numpy.int64)
        self.edge_count = 0

    def __len__(self):
        return len(self.nodes)

    def __contains__(self, label):
        return label in self.label_to_id

    def __repr__(self):
        return f"Multigraph(nodes={self.node_count}, edges={self.edge_count})"

    @property
    def node_count(self):
        return len(self.nodes)

    def has_node(self, label):
        return label in self.label_to_id

    def weight(self, u, v):
        if u not in self.label_to_id or v not in self.label_to_id:
            return 0
        return int(self.adjacency[self.label_to_id[u], self.label_to_id[v]])

    def members(self, label):
        return self.clusters[self.label_to_id[label]]

    def add_node(self, label, members=None):
        if not isinstance(label, str):
            raise TypeError(f"node labels must be str, got {type(label).__name__}")
        if label in self.label_to_id:
            raise DuplicateLabel(f"node {label!r} already exists")
        self.label_to_id[label] = len(self.nodes)
        self.nodes.append(label)
        self.clusters.append(frozenset(members) if members is not None else frozenset([label]))
        self.adjacency = numpy.pad(self.adjacency, ((0, 1), (0, 1)))

    def delete_node(self, label):
        """Remove a node and all its edges. Returns False when the label is unknown."""
        i = self.label_to_id.pop(label, None)
        if i is None:
            return False
        self.adjacency = numpy.delete(numpy.delete(self.adjacency, i, axis=0), i, axis=1)
        del self.nodes[i]
        del self.clusters[i]
        for name in self.nodes[i:]:
            self.label_to_id[name] -= 1
        self.recompute_edges()
        return True

    def recompute_edges(self):
        self.edge_count = int(numpy.triu(self.adjacency, 1).sum())
        return self.edge_count

    def _pair(self, u, v):
        if u not in self.label_to_id or v not in self.label_to_id:
            return None
        if u == v:
            raise InvalidEdge(f"self-edge on {u!r}")
        return self.label_to_id[u], self.label_to_id[v]

    def add_edge(self, u, v):
        pair = self._pair(u, v)
        if pair is None:
            return
        i, j = pair
        self.adjacency[i, j] += 1
        self.adjacency[j, i] += 1
        self.edge_count += 1

    def delete_edge(self, u, v):
        if u == v:
            return False
        pair = self._pair(u, v)
        if pair is None:
            return False
        i, j = pair
        if self.adjacency[i, j] == 0:
            return False
        self.adjacency[i, j] -= 1
        self.adjacency[j, i] -= 1
        self.edge_count -= 1
        return True

    def contract_edge(self, u, v):
        """
        Merge ``u`` and ``v`` into one node labelled ``u_v``.

        The merged node's multiplicity to every other node is the sum of the
        two endpoints' multiplicities; edges between ``u`` and ``v`` vanish.
        Returns the merged label, or None if either endpoint is unknown.
        """
        pair = self._pair(u, v)
        if pair is None:
            return None
        i, j = pair
        merged = u + JOIN_DELIMITER + v
        if merged in self.label_to_id:
            raise DuplicateLabel(f"contracted node {merged!r} already exists")

        row = self.adjacency[i] + self.adjacency[j]
        self.add_node(merged, self.clusters[i] | self.clusters[j])
        k = self.label_to_id[merged]
        row = numpy.append(row, 0)
        row[[i, j]] = 0
        self.adjacency[k, :] = row
        self.adjacency[:, k] = row

        self.delete_node(u)
        self.delete_node(v)
        return merged

    def random_edge(self, rng=None):
        """
        Draw one edge uniformly from the multiset of edges.

        A pair joined by three parallel edges is three times as likely as a
        pair joined by one. Returns None on a graph without edges.
        """
        if self.edge_count == 0:
            return None
        rows, columns = numpy.nonzero(numpy.triu(self.adjacency, 1))
        cumulative = numpy.cumsum(self.adjacency[rows, columns])
        pick = as_generator(rng).integers(cumulative[-1])
        index = int(numpy.searchsorted(cumulative, pick, side="right"))
        return self.nodes[rows[index]], self.nodes[columns[index]]

    def matrix(self):
        return scipy.sparse.csr_matrix(self.adjacency)

    def to_networkx(self):
        G = networkx.MultiGraph()
        G.add_nodes_from(self.nodes)
        rows, columns = numpy.nonzero(numpy.triu(self.adjacency, 1))
        for i, j in zip(rows, columns):
            G.add_edges_from([(self.nodes[i], self.nodes[j])] * int(self.adjacency[i, j]))
        return G

    @classmethod
    def from_networkx(cls, G: networkx.Graph):
        """
        Build a graph from a networkx Graph or MultiGraph.

        Nodes are labelled with ``str(node)``, so nodes whose string forms
        coincide (``1`` and ``"1"``) are rejected with DuplicateLabel before
        anything is built. Edge attributes are ignored.
        """
        labels = [str(node) for node in G.nodes()]
        if len(set(labels)) != len(labels):
            clashes = sorted({label for label in labels if labels.count(label) > 1})
            raise DuplicateLabel(f"nodes collide once stringified: {clashes}")
        graph = cls()
        for label in labels:
            graph.add_node(label)
        for u, v in G.edges():
            graph.add_edge(str(u), str(v))
        return graph

    @classmethod
    def from_matrix(cls, matrix, labels=None):
        if scipy.sparse.issparse(matrix):
            matrix = matrix.toarray()
        matrix = numpy.asarray(matrix)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise InvalidEdge(f"adjacency must be square, got shape {matrix.shape}")
        if not numpy.issubdtype(matrix.dtype, numpy.integer):
            if not numpy.array_equal(matrix, numpy.round(matrix)):
                raise InvalidEdge("adjacency must hold integer multiplicities")
        matrix = matrix.astype(numpy.int64)
        if (matrix < 0).any():
            raise InvalidEdge("adjacency holds negative multiplicities")
        if not numpy.array_equal(matrix, matrix.T):
            raise InvalidEdge("adjacency is not symmetric")
        if numpy.diagonal(matrix).any():
            raise InvalidEdge("adjacency has self-loops on the diagonal")

        if labels is None:
            labels = [str(i) for i in range(matrix.shape[0])]
        if len(labels) != matrix.shape[0]:
            raise InvalidEdge(f"{len(labels)} labels for {matrix.shape[0]} nodes")

        graph = cls()
        for label in labels:
            graph.add_node(label)
        graph.adjacency = matrix.copy()
        graph.recompute_edges()
        return graph
