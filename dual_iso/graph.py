r"""
Compact, read-only labeled directed graphs.

A `Graph` stores its nodes as the dense id range ``[0, node_count)``
with adjacency held in compressed sparse row form
(one flat tuple of edge targets plus per-node offsets into it)
and an index from each label to the sorted ids of the nodes carrying it.
Both the data graphs we search and the patterns we search for are `Graph`\ s.

`Graph`\ s are produced by a `GraphBuilder`, which stages nodes and relationships
and then compiles them.
"""
from collections import defaultdict
from typing import Dict, Generic, Hashable, Iterator, List, Sequence, Tuple, TypeVar

from attr import Factory, attrib, attrs
from immutablecollections import ImmutableDict
from immutablecollections.converter_utils import _to_immutabledict, _to_tuple
from more_itertools import pairwise
from vistautils.preconditions import check_arg

LabelT = TypeVar("LabelT", bound=Hashable)  # pylint:disable=invalid-name

NodeIds = Tuple[int, ...]


def is_strictly_ascending(node_ids: Sequence[int]) -> bool:
    return all(left < right for (left, right) in pairwise(node_ids))


def is_ascending(node_ids: Sequence[int]) -> bool:
    return all(left <= right for (left, right) in pairwise(node_ids))


@attrs(frozen=True, slots=True)
class Graph(Generic[LabelT]):
    """
    An immutable directed graph whose nodes are the integers ``[0, node_count)``,
    each carrying a hashable label.

    Self-loops and parallel relationships are allowed;
    parallel relationships show up as repeated ids in `neighbors`.

    Users should not construct these directly; use `GraphBuilder`.
    """

    _labels: Tuple[LabelT, ...] = attrib(converter=_to_tuple)
    _label_index: ImmutableDict[LabelT, NodeIds] = attrib(
        converter=_to_immutabledict
    )
    # node n's neighbors are _targets[_offsets[n]:_offsets[n + 1]]
    _offsets: NodeIds = attrib(converter=_to_tuple)
    _targets: NodeIds = attrib(converter=_to_tuple)

    def __attrs_post_init__(self) -> None:
        if len(self._offsets) != len(self._labels) + 1:
            raise RuntimeError(
                f"Expected {len(self._labels) + 1} adjacency offsets "
                f"but got {len(self._offsets)}"
            )
        if self._offsets[-1] != len(self._targets):
            raise RuntimeError(
                f"Adjacency offsets end at {self._offsets[-1]} "
                f"but there are {len(self._targets)} relationship targets"
            )
        for target in self._targets:
            if not (isinstance(target, int) and 0 <= target < len(self._labels)):
                raise RuntimeError(
                    f"Relationship target {target!r} is not a node of this graph"
                )
        for node_id in range(len(self._labels)):
            if not is_ascending(self.neighbors(node_id)):
                raise RuntimeError(
                    f"Neighbors of node {node_id} are not sorted: "
                    f"{self.neighbors(node_id)}"
                )
        # Everything downstream merges these lists,
        # so an unsorted entry would silently produce wrong matches.
        for (label, node_ids) in self._label_index.items():
            if not is_strictly_ascending(node_ids):
                raise RuntimeError(
                    f"Nodes for label {label!r} are not sorted and unique: {node_ids}"
                )

    def node_count(self) -> int:
        return len(self._labels)

    def relationship_count(self) -> int:
        return len(self._targets)

    def label(self, node_id: int) -> LabelT:
        self._check_node_id(node_id)
        return self._labels[node_id]

    def nodes_with_label(self, label: LabelT) -> NodeIds:
        """
        Get the ascending ids of all nodes with the given *label*.

        If no node carries *label*, the result is empty.
        """
        return self._label_index.get(label, ())

    def degree(self, node_id: int) -> int:
        self._check_node_id(node_id)
        return self._offsets[node_id + 1] - self._offsets[node_id]

    def neighbors(self, node_id: int) -> NodeIds:
        """
        Get the ascending ids of the targets of all relationships leaving *node_id*.
        """
        self._check_node_id(node_id)
        return self._targets[self._offsets[node_id] : self._offsets[node_id + 1]]

    def relationships(self) -> Iterator[Tuple[int, int]]:
        for source in range(self.node_count()):
            for target in self.neighbors(source):
                yield (source, target)

    def _check_node_id(self, node_id: int) -> None:
        check_arg(
            isinstance(node_id, int) and 0 <= node_id < len(self._labels),
            "Node id %s must be within range [0..%s).",
            (node_id, len(self._labels)),
        )

    def __str__(self) -> str:
        return (
            f"Graph(nodes={self.node_count()}, "
            f"relationships={self.relationship_count()})"
        )


@attrs(slots=True)
class GraphBuilder(Generic[LabelT]):
    """
    Stages nodes and relationships for a `Graph`.

    Nodes must be added with contiguous ids starting from 0,
    and relationships may only connect nodes which have already been added.
    All methods but `build` return the builder itself so calls may be chained:

        graph = GraphBuilder().add_node(0, "a").add_node(1, "b").add_relationship(0, 1).build()
    """

    _labels: List[LabelT] = attrib(init=False, default=Factory(list))
    _adjacency: List[List[int]] = attrib(init=False, default=Factory(list))
    # maps each label to its first-seen instance so equal labels share one object
    _interned_labels: Dict[LabelT, LabelT] = attrib(
        init=False, default=Factory(dict)
    )

    def node_count(self) -> int:
        return len(self._labels)

    def add_node(self, node_id: int, label: LabelT) -> "GraphBuilder[LabelT]":
        """
        Add a node with the given *label*.

        *node_id* must be at most the number of nodes added so far.
        Adding an id which is already present does nothing;
        in particular the node keeps its original label.
        """
        check_arg(
            isinstance(node_id, int) and 0 <= node_id <= len(self._labels),
            "Next node id should be within range [0..%s], but was %s.",
            (len(self._labels), node_id),
        )
        if node_id == len(self._labels):
            self._labels.append(self._interned_labels.setdefault(label, label))
            self._adjacency.append([])
        return self

    def add_relationship(self, source: int, target: int) -> "GraphBuilder[LabelT]":
        check_arg(
            isinstance(source, int) and 0 <= source < len(self._labels),
            "Start node %s has not been added yet.",
            (source,),
        )
        check_arg(
            isinstance(target, int) and 0 <= target < len(self._labels),
            "End node %s has not been added yet.",
            (target,),
        )
        self._adjacency[source].append(target)
        return self

    def build(self) -> Graph[LabelT]:
        offsets = [0]
        targets: List[int] = []
        for neighbors in self._adjacency:
            targets.extend(sorted(neighbors))
            offsets.append(len(targets))

        nodes_by_label: Dict[LabelT, List[int]] = defaultdict(list)
        for (node_id, label) in enumerate(self._labels):
            nodes_by_label[label].append(node_id)

        return Graph(
            labels=self._labels,
            label_index=(
                (label, tuple(sorted(node_ids)))
                for (label, node_ids) in nodes_by_label.items()
            ),
            offsets=offsets,
            targets=targets,
        )
