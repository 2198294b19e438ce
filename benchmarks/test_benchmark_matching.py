import logging

import pytest

from dual_iso import Graph, GraphBuilder, dual_iso, simple_iso
from dual_iso.random_utils import DEFAULT_LABEL, random_graph

NODE_COUNT = 42
EDGE_PROBABILITY = 0.1

GRAPH = random_graph(NODE_COUNT, EDGE_PROBABILITY, seed=1337)

PATTERN: Graph = (
    GraphBuilder()
    .add_node(0, DEFAULT_LABEL)
    .add_node(1, DEFAULT_LABEL)
    .add_node(2, DEFAULT_LABEL)
    .add_relationship(0, 1)
    .add_relationship(1, 0)
    .add_relationship(1, 2)
    .build()
)


def count_matches(algorithm) -> int:
    return len(algorithm(GRAPH, PATTERN))


@pytest.mark.parametrize("algorithm", [simple_iso, dual_iso])
def test_random_graph_matching(algorithm, benchmark):
    logging.info(
        "Matching %s against %s: %s matches",
        PATTERN,
        GRAPH,
        count_matches(algorithm),
    )
    benchmark.name = algorithm.__name__
    benchmark.group = f"random_graph n = {NODE_COUNT}, p = {EDGE_PROBABILITY}"
    benchmark(count_matches, algorithm)
