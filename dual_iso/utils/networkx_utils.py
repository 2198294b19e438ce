"""
Conversion between NetworkX graphs and `Graph`.
"""
from typing import Any, Callable, Dict, Optional, Tuple

from attr import attrib, attrs
from attr.validators import instance_of
from immutablecollections import ImmutableDict, immutabledict
from immutablecollections.converter_utils import _to_immutabledict, _to_tuple
from networkx import DiGraph, MultiDiGraph
from vistautils.preconditions import check_arg

from dual_iso.graph import Graph, GraphBuilder

LABEL = "label"


@attrs(frozen=True, slots=True)
class NetworkXGraphConversion:
    """
    A `Graph` built from a NetworkX graph,
    together with the correspondence between the NetworkX nodes and `Graph` node ids.
    """

    graph: Graph = attrib(validator=instance_of(Graph))
    node_to_id: ImmutableDict[Any, int] = attrib(converter=_to_immutabledict)
    id_to_node: Tuple[Any, ...] = attrib(converter=_to_tuple)

    def __attrs_post_init__(self) -> None:
        if len(self.id_to_node) != self.graph.node_count():
            raise RuntimeError(
                f"Got {len(self.id_to_node)} NetworkX nodes "
                f"for a graph with {self.graph.node_count()} nodes"
            )


def graph_from_digraph(
    digraph: DiGraph,
    *,
    label_attribute: str = LABEL,
    sort_key: Optional[Callable[[Tuple[Any, Any]], Any]] = None,
) -> NetworkXGraphConversion:
    """
    Get a `Graph` with the same structure as *digraph*,
    which may be a `DiGraph` or a `MultiDiGraph`.

    Each node of *digraph* must have its label in its *label_attribute* node attribute.
    Nodes get ids in the iteration order of *digraph* unless *sort_key* is specified,
    in which case they get ids in order of *sort_key*.
    Just like for a regular Python sort key function,
    *sort_key* should expect to receive a 2-tuple of the node itself
    and its NetworkX node attribute dictionary.

    Parallel edges of a `MultiDiGraph` become parallel relationships.
    """
    check_arg(
        isinstance(digraph, DiGraph),
        "Can only convert directed graphs but got %s",
        (type(digraph),),
    )
    nodes_with_data = list(digraph.nodes(data=True))
    if sort_key is not None:
        nodes_with_data.sort(key=sort_key)

    builder: GraphBuilder = GraphBuilder()
    node_to_id: Dict[Any, int] = {}
    for (node_id, (node, node_data)) in enumerate(nodes_with_data):
        check_arg(
            label_attribute in node_data,
            "Node %s lacks the label attribute %s",
            (node, label_attribute),
        )
        builder.add_node(node_id, node_data[label_attribute])
        node_to_id[node] = node_id

    # a MultiDiGraph reports each of a group of parallel edges separately
    for (source, target) in digraph.edges():
        builder.add_relationship(node_to_id[source], node_to_id[target])

    return NetworkXGraphConversion(
        graph=builder.build(),
        node_to_id=immutabledict(node_to_id),
        id_to_node=(node for (node, _) in nodes_with_data),
    )


def digraph_from_graph(graph: Graph, *, label_attribute: str = LABEL) -> MultiDiGraph:
    """
    Get a `MultiDiGraph` whose nodes are the node ids of *graph*,
    each with its label in the *label_attribute* node attribute.
    """
    ret = MultiDiGraph()
    for node_id in range(graph.node_count()):
        ret.add_node(node_id, **{label_attribute: graph.label(node_id)})
    ret.add_edges_from(graph.relationships())
    return ret
