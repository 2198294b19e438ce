"""
Finding all embeddings of a pattern `Graph` in a data `Graph`.

An embedding (a *match*) aligns every pattern node to a distinct data graph node
with the same label such that every pattern relationship *u* -> *v*
is mirrored by a data graph relationship from the image of *u* to the image of *v*.

The search first prunes candidate alignments with graph simulation
(see `dual_iso.simulation`) and then assigns pattern nodes one at a time in id order,
re-running `simple_simulation` after each assignment to prune what remains.
"""
import logging
import sys
from typing import Iterator, List, Tuple

from attr import attrib, attrs
from attr.validators import instance_of
from more_itertools import only

from dual_iso.graph import Graph
from dual_iso.simulation import (
    CandidateSets,
    Simulation,
    initial_candidates,
    simple_simulation,
)

Match = Tuple[int, ...]
"""
The data graph node aligned to each pattern node, in pattern node id order.
"""


@attrs(frozen=True, slots=True)
class GraphMatching:
    """
    Matching of a particular *pattern* against a particular *graph*.

    Both graphs must use the same type of labels.

    Creating a matching for a large pattern raises the interpreter-wide recursion limit,
    and the limit stays raised until `reset_recursion_limit` is called.
    """

    graph: Graph = attrib(validator=instance_of(Graph))
    pattern: Graph = attrib(validator=instance_of(Graph))
    _old_recursion_limit: int = attrib(
        init=False, factory=sys.getrecursionlimit, eq=False, repr=False
    )

    def __attrs_post_init__(self) -> None:
        # The search recurses (through generators) once per pattern node.
        expected_max_recursion_level = 2 * self.pattern.node_count()
        if self._old_recursion_limit < 1.5 * expected_max_recursion_level:
            # Give some breathing room.
            sys.setrecursionlimit(int(1.5 * expected_max_recursion_level))

    def reset_recursion_limit(self) -> None:
        """
        Restores the recursion limit in effect before this matching was created.
        """
        sys.setrecursionlimit(self._old_recursion_limit)

    def matches(self, *, simulation: Simulation = Simulation.DUAL) -> Iterator[Match]:
        """
        Iterates over all matches of the pattern against the graph.

        *simulation* selects how candidates are pruned before the search starts;
        it affects only how quickly matches are found, never which matches are found.
        Matches come out in a deterministic order:
        lexicographically by the data graph nodes chosen for each pattern node.
        """
        candidates = initial_candidates(self.graph, self.pattern)
        logging.debug(
            "Initial candidate set sizes: %s", [len(c) for c in candidates]
        )
        if not simulation.refine(self.graph, self.pattern, candidates):
            logging.debug("%s simulation ruled out any match", simulation.value)
            return
        logging.debug(
            "Candidate set sizes after %s simulation: %s",
            simulation.value,
            [len(c) for c in candidates],
        )
        yield from self._search(candidates, 0)

    def _search(self, candidates: CandidateSets, depth: int) -> Iterator[Match]:
        # entries of candidates before depth each hold exactly the node chosen for them
        if depth == self.pattern.node_count():
            yield tuple(only(aligned) for aligned in candidates)
            return

        for graph_node in candidates[depth]:
            # simulation alone would allow two pattern nodes to share a graph node
            if any(aligned[0] == graph_node for aligned in candidates[:depth]):
                continue
            branch_candidates = list(candidates)
            branch_candidates[depth] = (graph_node,)
            if simple_simulation(self.graph, self.pattern, branch_candidates):
                yield from self._search(branch_candidates, depth + 1)


def simple_iso(graph: Graph, pattern: Graph) -> List[Match]:
    """
    Get all matches of *pattern* against *graph*, pruning with simple simulation.
    """
    return _all_matches(graph, pattern, Simulation.SIMPLE)


def dual_iso(graph: Graph, pattern: Graph) -> List[Match]:
    """
    Get all matches of *pattern* against *graph*, pruning with dual simulation.
    """
    return _all_matches(graph, pattern, Simulation.DUAL)


def _all_matches(graph: Graph, pattern: Graph, simulation: Simulation) -> List[Match]:
    matches = list(GraphMatching(graph, pattern).matches(simulation=simulation))
    logging.debug("Found %s matches of %s against %s", len(matches), pattern, graph)
    return matches
