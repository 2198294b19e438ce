"""
Finds all matches of a pattern graph against a data graph, both read from JSON files.

Graph files look like::

    {
        "nodes": [{"id": "alice", "label": "person"}, {"id": "acme", "label": "company"}],
        "edges": [{"source": "alice", "target": "acme"}]
    }

The output is a JSON list with one entry per match.
Each entry is a list of [pattern node id, data graph node id] pairs,
one per pattern node in the order the pattern file lists them.
"""
import json
import logging
from pathlib import Path
from typing import Any, List, Tuple

from networkx import MultiDiGraph
from vistautils.parameters import Parameters
from vistautils.parameters_only_entrypoint import parameters_only_entry_point

from dual_iso.matching import GraphMatching
from dual_iso.simulation import Simulation
from dual_iso.utils.networkx_utils import (
    LABEL,
    NetworkXGraphConversion,
    graph_from_digraph,
)

USAGE_MESSAGE = """
    match_graphs.py param_file
     \twhere param_file has the following parameters:
     \t\tgraph_file: JSON file holding the graph to search
     \t\tpattern_file: JSON file holding the pattern to search for
     \t\toutput_file: where to write the matches found
     \t\tsimulation (optional): simple or dual (default)
     \t\tlabel_attribute (optional): node attribute holding node labels (default: label)
   """


def read_graph_json(path: Path, *, label_attribute: str = LABEL) -> NetworkXGraphConversion:
    with open(path, "r", encoding="utf-8") as graph_file:
        graph_json = json.load(graph_file)

    digraph = MultiDiGraph()
    for node_json in graph_json.get("nodes", []):
        node_data = dict(node_json)
        node_id = node_data.pop("id")
        if node_id in digraph:
            raise RuntimeError(f"Node {node_id!r} appears more than once in {path}")
        digraph.add_node(node_id, **node_data)
    for edge_json in graph_json.get("edges", []):
        source = edge_json["source"]
        target = edge_json["target"]
        for endpoint in (source, target):
            if endpoint not in digraph:
                raise RuntimeError(
                    f"Edge {source} -> {target} in {path} references "
                    f"the unknown node {endpoint}"
                )
        digraph.add_edge(source, target)

    return graph_from_digraph(digraph, label_attribute=label_attribute)


def main(params: Parameters) -> None:
    label_attribute = params.string("label_attribute", default=LABEL)
    graph = read_graph_json(
        params.existing_file("graph_file"), label_attribute=label_attribute
    )
    pattern = read_graph_json(
        params.existing_file("pattern_file"), label_attribute=label_attribute
    )
    simulation = Simulation(
        params.string(
            "simulation",
            valid_options=[simulation.value for simulation in Simulation],
            default=Simulation.DUAL.value,
        )
    )
    output_file = params.creatable_file("output_file")

    logging.info("Loaded graph %s and pattern %s", graph.graph, pattern.graph)

    # pairs rather than objects since JSON object keys would have to be strings
    matches: List[List[Tuple[Any, Any]]] = [
        [
            (pattern.id_to_node[pattern_node], graph.id_to_node[graph_node])
            for (pattern_node, graph_node) in enumerate(match)
        ]
        for match in GraphMatching(graph.graph, pattern.graph).matches(
            simulation=simulation
        )
    ]

    logging.info("Writing %s matches to %s", len(matches), output_file)
    with open(output_file, "w", encoding="utf-8") as out:
        json.dump(matches, out, indent=2)


if __name__ == "__main__":
    parameters_only_entry_point(main, usage_message=USAGE_MESSAGE)
