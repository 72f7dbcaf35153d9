"""
Single-trial Karger contraction over a Multigraph.

One run contracts uniformly drawn edges until two super-nodes remain; their
labels (and clusters) describe the two sides of the estimated cut. Repeating
runs and keeping the smallest cut is up to the caller.
"""
import logging
from copy import deepcopy

from multigraph import Multigraph, as_generator

logger = logging.getLogger(__name__)

MIN_NODES = 2


class Karger:
    def __init__(self, graph: Multigraph, rng=None):
        self.graph = graph
        self.rng = as_generator(rng)

    def contract(self):
        """Contract a private copy of the graph and return it; the original is untouched."""
        graph = deepcopy(self.graph)
        steps = 0
        while graph.node_count > MIN_NODES and graph.edge_count > 1:
            edge = graph.random_edge(self.rng)
            if edge is None:
                break
            merged = graph.contract_edge(*edge)
            steps += 1
            logger.debug("contracted %s-%s into %s (%d nodes, %d edges left)",
                         edge[0], edge[1], merged, graph.node_count, graph.edge_count)

        if graph.node_count > MIN_NODES:
            # ran out of edges first, the survivors are not a single cut
            logger.warning("stopped after %d contractions with %d nodes and %d edges left",
                           steps, graph.node_count, graph.edge_count)
        return graph

    def estimate_cut(self):
        if self.graph.node_count < MIN_NODES:
            raise ValueError(f"a cut needs at least {MIN_NODES} nodes, graph has {self.graph.node_count}")
        graph = self.contract()
        return graph.nodes[0], graph.nodes[1]


def kargerMinCut(graph, seed=None):
    return Karger(graph, seed).estimate_cut()
