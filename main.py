import argparse
import logging

from kargerMinCut import Karger
from multigraph import Multigraph


def sample_graph():
    graph = Multigraph()
    for label in ["A", "B", "C"]:
        graph.add_node(label)
    graph.add_edge("A", "B")
    graph.add_edge("A", "B")  # multigraph: A-B now has 2 edges
    graph.add_edge("B", "C")
    return graph


def run(seed=None):
    return Karger(sample_graph(), seed).estimate_cut()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Estimate a minimum cut with one Karger contraction run.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the edge sampler")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every contraction")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    print(run(args.seed))


if __name__ == "__main__":
    main()
