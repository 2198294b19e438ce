"""
Subgraph pattern matching over labeled directed graphs.

Matches are found by pruning candidate node alignments with (simple or dual) graph simulation
and then enumerating the surviving alignments by backtracking search.
Start with `Graph`, `GraphBuilder`, `simple_iso`, and `dual_iso`.
"""
from dual_iso.graph import Graph, GraphBuilder
from dual_iso.matching import GraphMatching, Match, dual_iso, simple_iso
from dual_iso.simulation import Simulation
