"""
Graph simulation: cheap pruning of which data graph nodes
could possibly be aligned to which pattern nodes.

Both algorithms here work on *candidate sets*:
a list holding, for each pattern node id, an ascending sequence of the data graph
nodes not yet ruled out as its image.
They refine the candidate sets in place until a fixpoint is reached.

Candidate entries are never mutated.
An entry which shrinks is replaced with a new tuple,
while entries which do not change keep pointing at whatever sequence they started as
(usually a tuple borrowed from the data graph's label index).
Callers who want to keep an earlier state around
therefore only need to take a shallow copy of the list.
"""
import logging
from enum import Enum
from typing import List, Sequence

from dual_iso.graph import Graph
from dual_iso.sorted_sets import intersect, intersects, union_in_place

CandidateSets = List[Sequence[int]]


def initial_candidates(graph: Graph, pattern: Graph) -> CandidateSets:
    """
    Get the candidate sets allowed by labels alone.

    Each entry is the data graph's own label index entry for the label of that pattern node;
    nothing is copied.
    """
    return [
        graph.nodes_with_label(pattern.label(pattern_node))
        for pattern_node in range(pattern.node_count())
    ]


def simple_simulation(graph: Graph, pattern: Graph, candidates: CandidateSets) -> bool:
    """
    Refines *candidates* in place by simple simulation.

    For every pattern relationship *u* -> *v*,
    a candidate of *u* survives only if it has a relationship to some candidate of *v*.
    This is repeated until nothing changes.

    Returns *False* if some candidate set is or becomes empty,
    in which case the pattern cannot match and *candidates* is left partially refined.
    Otherwise returns *True*.
    """
    if not all(candidates):
        return False

    passes = 0
    is_updated = True
    while is_updated:
        is_updated = False
        passes += 1
        for u_pattern in range(pattern.node_count()):
            for v_pattern in pattern.neighbors(u_pattern):
                v_candidates = candidates[v_pattern]
                u_candidates = candidates[u_pattern]
                retained = [
                    u_graph
                    for u_graph in u_candidates
                    if intersects(graph.neighbors(u_graph), v_candidates)
                ]
                if not retained:
                    logging.debug(
                        "Simple simulation emptied candidates for pattern node %s "
                        "on pass %s",
                        u_pattern,
                        passes,
                    )
                    return False
                if len(retained) < len(u_candidates):
                    candidates[u_pattern] = tuple(retained)
                    is_updated = True

    logging.debug("Simple simulation reached a fixpoint after %s passes", passes)
    return True


def dual_simulation(graph: Graph, pattern: Graph, candidates: CandidateSets) -> bool:
    """
    Refines *candidates* in place by dual simulation.

    For every pattern relationship *u* -> *v*,
    a candidate of *u* survives only if it has a relationship to some candidate of *v*,
    and a candidate of *v* survives only if some surviving candidate of *u*
    has a relationship to it.
    This is repeated until nothing changes.

    This prunes at least as much as `simple_simulation`, at a higher cost per pass.

    Returns *False* if some candidate set is or becomes empty,
    in which case the pattern cannot match and *candidates* is left partially refined.
    Otherwise returns *True*.
    """
    if not all(candidates):
        return False

    passes = 0
    is_updated = True
    while is_updated:
        is_updated = False
        passes += 1
        for u_pattern in range(pattern.node_count()):
            for v_pattern in pattern.neighbors(u_pattern):
                v_candidates = candidates[v_pattern]
                u_candidates = candidates[u_pattern]
                retained: List[int] = []
                reachable: List[int] = []
                for u_graph in u_candidates:
                    successors = intersect(graph.neighbors(u_graph), v_candidates)
                    if successors:
                        retained.append(u_graph)
                        union_in_place(reachable, successors)
                if not retained:
                    logging.debug(
                        "Dual simulation emptied candidates for pattern node %s "
                        "on pass %s",
                        u_pattern,
                        passes,
                    )
                    return False
                if len(retained) < len(u_candidates):
                    candidates[u_pattern] = tuple(retained)
                    is_updated = True

                # read v's candidates again since u and v coincide for a self-loop
                new_v_candidates = intersect(candidates[v_pattern], reachable)
                if not new_v_candidates:
                    logging.debug(
                        "Dual simulation emptied candidates for pattern node %s "
                        "on pass %s",
                        v_pattern,
                        passes,
                    )
                    return False
                if len(new_v_candidates) < len(candidates[v_pattern]):
                    candidates[v_pattern] = tuple(new_v_candidates)
                    is_updated = True

    logging.debug("Dual simulation reached a fixpoint after %s passes", passes)
    return True


class Simulation(Enum):
    """
    Which simulation algorithm to use to prune candidates before searching for matches.
    """

    SIMPLE = "simple"
    DUAL = "dual"

    def refine(self, graph: Graph, pattern: Graph, candidates: CandidateSets) -> bool:
        if self is Simulation.SIMPLE:
            return simple_simulation(graph, pattern, candidates)
        return dual_simulation(graph, pattern, candidates)
