import pytest
from networkx import DiGraph, MultiDiGraph

from dual_iso import dual_iso
from dual_iso.utils.networkx_utils import digraph_from_graph, graph_from_digraph
from tests.dual_iso_test_utils import paper_graph


def test_graph_from_digraph():
    digraph = DiGraph()
    digraph.add_node("alice", label="person")
    digraph.add_node("acme", label="company")
    digraph.add_node("bob", label="person", age=3)
    digraph.add_edge("alice", "acme")
    digraph.add_edge("bob", "acme")
    digraph.add_edge("bob", "alice")

    conversion = graph_from_digraph(digraph)
    graph = conversion.graph

    assert conversion.id_to_node == ("alice", "acme", "bob")
    assert conversion.node_to_id["bob"] == 2
    assert graph.node_count() == 3
    assert graph.relationship_count() == 3
    assert graph.label(1) == "company"
    assert graph.nodes_with_label("person") == (0, 2)
    assert graph.neighbors(2) == (0, 1)


def test_graph_from_digraph_sorted_by():
    digraph = DiGraph()
    digraph.add_node("a", rank=2, label="x")
    digraph.add_node("b", rank=0, label="y")
    digraph.add_node("c", rank=1, label="x")
    digraph.add_edge("a", "b")

    def by_rank(node_node_data_tuple) -> int:
        (_, node_data) = node_node_data_tuple
        return node_data["rank"]

    conversion = graph_from_digraph(digraph, sort_key=by_rank)
    assert conversion.id_to_node == ("b", "c", "a")
    assert conversion.graph.neighbors(2) == (0,)
    assert conversion.graph.nodes_with_label("x") == (1, 2)


def test_graph_from_multidigraph_keeps_parallel_edges():
    digraph = MultiDiGraph()
    digraph.add_node(0, kind="a")
    digraph.add_node(1, kind="b")
    digraph.add_edge(0, 1)
    digraph.add_edge(0, 1)

    graph = graph_from_digraph(digraph, label_attribute="kind").graph
    assert graph.neighbors(0) == (1, 1)


def test_graph_from_digraph_requires_labels():
    digraph = DiGraph()
    digraph.add_node("unlabeled")
    with pytest.raises(ValueError, match="lacks the label attribute"):
        graph_from_digraph(digraph)


def test_round_trip_preserves_matches():
    graph = paper_graph()
    digraph = digraph_from_graph(graph)
    assert digraph.number_of_nodes() == graph.node_count()
    assert digraph.number_of_edges() == graph.relationship_count()
    assert digraph.nodes[6]["label"] == "b"

    rebuilt = graph_from_digraph(digraph).graph
    for node_id in range(graph.node_count()):
        assert rebuilt.neighbors(node_id) == graph.neighbors(node_id)
    pattern = graph_from_digraph(
        digraph.subgraph([2, 6, 7]).copy(), sort_key=lambda item: item[0]
    ).graph
    assert (2, 6, 7) in dual_iso(rebuilt, pattern)
