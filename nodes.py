"""
what the layout engine needs to know about a tree.

scan.TreeNode is the filesystem implementation; anything with these
methods works, e.g. a tree loaded back from a json archive.
"""
from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class WeightedNode(Protocol):
    name: str

    def weight(self) -> float:
        ...

    def children(self) -> Sequence['WeightedNode']:
        ...

    def is_leaf(self) -> bool:
        ...

    def is_directory(self) -> bool:
        ...

    def category(self) -> str:
        ...


def sorted_by_weight(nodes):
    # stable, so equal weights keep their input order
    return sorted(nodes, key=lambda n: n.weight(), reverse=True)
