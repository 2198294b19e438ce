"""
Utilities for generating random graphs.

Graphs are generated from a seeded standard library random number generator
so that benchmarks and tests see the same graph on every run.
Label assignment goes through a `SequenceChooser`,
which makes it easy to swap in a deterministic policy.
"""
from abc import ABC, abstractmethod
from random import Random
from typing import Hashable, Optional, Sequence, TypeVar

from attr import attrib, attrs
from attr.validators import instance_of
from vistautils.preconditions import check_arg

from dual_iso.graph import Graph, GraphBuilder

T = TypeVar("T")  # pylint:disable=invalid-name

DEFAULT_LABEL = "fixed"


class SequenceChooser(ABC):
    """
    Abstraction over a strategy for selecting items from a sequence.
    """

    @abstractmethod
    def choice(self, elements: Sequence[T]) -> T:
        """
        Choose one element from *elements* using some undefined policy.

        Args:
            elements: The sequence of elements to choose from.  If this sequence is empty, an
            `IndexError` should be raised.

        Returns:
            One of the elements of *elements*; no further requirement is defined.
        """


@attrs(frozen=True, slots=True)
class RandomChooser(SequenceChooser):
    """
    A `SequenceChooser` which delegates the choice to a contained standard library random number
     generator.
    """

    _random: Random = attrib(validator=instance_of(Random))

    def choice(self, elements: Sequence[T]) -> T:
        return self._random.choice(elements)


@attrs(slots=True)
class RotatingIndexChooser(SequenceChooser):
    """
    A `SequenceChooser` which increments the index it chooses after each choice.

    If the current index exceeds the length of the supplied (non-empty) sequence,
    then the element at the current index modulo the sequence length is returned.
    """

    _cur_index: int = attrib(default=0, init=False)

    def choice(self, elements: Sequence[T]) -> T:
        ret = elements[self._cur_index % len(elements)]
        self._cur_index += 1
        return ret


def random_graph(
    node_count: int,
    edge_probability: float,
    *,
    labels: Sequence[Hashable] = (DEFAULT_LABEL,),
    seed: int = 0,
    label_chooser: Optional[SequenceChooser] = None,
) -> Graph:
    """
    Generate a directed graph with *node_count* nodes in which each ordered pair of nodes
    (including a node paired with itself) is connected with probability *edge_probability*.

    Each node's label is picked from *labels* by *label_chooser*.
    If no chooser is given, labels are picked at random
    using the same generator which places the relationships.
    """
    check_arg(node_count >= 0, "Node count must be non-negative but got %s", (node_count,))
    check_arg(
        0.0 <= edge_probability <= 1.0,
        "Edge probability must be within [0, 1] but got %s",
        (edge_probability,),
    )
    check_arg(labels, "Must supply at least one label")

    rng = Random(seed)
    if label_chooser is None:
        label_chooser = RandomChooser(rng)

    builder: GraphBuilder = GraphBuilder()
    for node_id in range(node_count):
        builder.add_node(node_id, label_chooser.choice(labels))

    for source in range(node_count):
        for target in range(node_count):
            if rng.random() < edge_probability:
                builder.add_relationship(source, target)

    return builder.build()
