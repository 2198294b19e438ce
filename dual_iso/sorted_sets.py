"""
Set operations over ascending sequences of node ids.

Each of these is a single linear merge-style pass over both inputs.
Inputs must be sorted in ascending order; they may contain repeated ids
(e.g. the neighbors of a node with parallel relationships),
but all outputs are duplicate-free.
"""
from typing import List, Sequence


def intersects(left: Sequence[int], right: Sequence[int]) -> bool:
    """
    Returns whether *left* and *right* share at least one element.
    """
    i = 0
    j = 0
    while i < len(left) and j < len(right):
        if left[i] < right[j]:
            i += 1
        elif left[i] > right[j]:
            j += 1
        else:
            return True
    return False


def intersect(left: Sequence[int], right: Sequence[int]) -> List[int]:
    """
    Get the ascending, duplicate-free intersection of *left* and *right*.
    """
    ret: List[int] = []
    i = 0
    j = 0
    while i < len(left) and j < len(right):
        if left[i] < right[j]:
            i += 1
        elif left[i] > right[j]:
            j += 1
        else:
            if not ret or ret[-1] != left[i]:
                ret.append(left[i])
            i += 1
            j += 1
    return ret


def union_in_place(target: List[int], other: Sequence[int]) -> None:
    """
    Make *target* the ascending, duplicate-free union of itself and *other*.
    """
    merged: List[int] = []
    i = 0
    j = 0
    while i < len(target) or j < len(other):
        if j == len(other) or (i < len(target) and target[i] <= other[j]):
            next_id = target[i]
            i += 1
        else:
            next_id = other[j]
            j += 1
        if not merged or merged[-1] != next_id:
            merged.append(next_id)
    target[:] = merged
