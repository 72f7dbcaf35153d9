import logging

import networkx
import numpy
import pytest

from kargerMinCut import Karger, kargerMinCut
from multigraph import JOIN_DELIMITER, Multigraph


def build(labels, edges):
    graph = Multigraph()
    for label in labels:
        graph.add_node(label)
    for u, v in edges:
        graph.add_edge(u, v)
    return graph


@pytest.fixture
def abc():
    return build("ABC", [("A", "B"), ("A", "B"), ("B", "C")])


@pytest.mark.parametrize("seed", range(20))
def test_three_node_cut_covers_every_label(abc, seed):
    cut = Karger(abc, seed).estimate_cut()
    assert len(cut) == 2
    parts = [label.split(JOIN_DELIMITER) for label in cut]
    assert all(parts)
    assert sorted(parts[0] + parts[1]) == ["A", "B", "C"]


def test_estimate_leaves_original_graph_untouched(abc):
    before = abc.adjacency.copy()
    Karger(abc, 3).estimate_cut()
    assert abc.nodes == ["A", "B", "C"]
    assert numpy.array_equal(abc.adjacency, before)
    assert abc.edge_count == 3


def test_seeded_runs_are_reproducible():
    labels = [str(i) for i in range(10)]
    graph = Multigraph.from_networkx(networkx.cycle_graph(10))
    assert graph.nodes == labels
    assert kargerMinCut(graph, 42) == kargerMinCut(graph, 42)


def test_contract_stops_at_two_nodes(monkeypatch):
    calls = []
    contract_edge = Multigraph.contract_edge

    def counting(self, u, v):
        calls.append((u, v))
        return contract_edge(self, u, v)

    monkeypatch.setattr(Multigraph, "contract_edge", counting)
    graph = Multigraph.from_networkx(networkx.path_graph(7))
    contracted = Karger(graph, 0).contract()
    assert contracted.node_count == 2
    assert len(calls) == 7 - 2
    sides = [contracted.members(label) for label in contracted.nodes]
    assert sides[0] | sides[1] == frozenset(graph.nodes)
    assert not sides[0] & sides[1]


def test_contract_stops_early_when_edges_run_out(caplog):
    graph = build("ABCD", [("A", "B")])
    with caplog.at_level(logging.WARNING, logger="kargerMinCut"):
        cut = Karger(graph, 1).estimate_cut()
    assert cut == ("A", "B")
    assert "stopped after 0 contractions" in caplog.text


def test_estimate_needs_two_nodes():
    with pytest.raises(ValueError):
        Karger(build("A", []), 0).estimate_cut()
    with pytest.raises(ValueError):
        Karger(Multigraph()).estimate_cut()


def test_two_node_graph_is_returned_as_is():
    graph = build("XY", [("X", "Y")] * 3)
    assert Karger(graph).estimate_cut() == ("X", "Y")


def test_accepts_generator():
    rng = numpy.random.default_rng(9)
    karger = Karger(build("ABC", [("A", "B"), ("B", "C")]), rng)
    assert karger.rng is rng


def test_best_of_many_runs_matches_stoer_wagner():
    G = networkx.Graph()
    G.add_edges_from([("a", "b"), ("b", "c"), ("a", "c")])
    G.add_edges_from([("d", "e"), ("e", "f"), ("d", "f")])
    G.add_edge("c", "d")
    cut_value, (left, right) = networkx.stoer_wagner(G)

    graph = Multigraph.from_networkx(G)
    karger = Karger(graph, 12345)
    best = min((karger.contract() for _ in range(200)), key=lambda g: g.edge_count)

    assert best.node_count == 2
    assert best.edge_count == cut_value == 1
    sides = {best.members(label) for label in best.nodes}
    assert sides == {frozenset(left), frozenset(right)}
