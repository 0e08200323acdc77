import matplotlib

matplotlib.use('Agg')

import pytest

from config import TreemapConfig


class Node(object):
    """in-memory weighted node"""

    def __init__(self, name, weight=None, children=(), category='other', is_dir=None):
        self.name = name
        self._children = list(children)
        self._weight = weight if weight is not None else sum(c.weight() for c in self._children)
        self._category = category
        self._is_dir = bool(self._children) if is_dir is None else is_dir

    def weight(self):
        return self._weight

    def children(self):
        return self._children

    def is_leaf(self):
        return not self._children

    def is_directory(self):
        return self._is_dir

    def category(self):
        return 'directory' if self._is_dir else self._category

    def __repr__(self):
        return '<Node %s %s>' % (self.name, self._weight)


def leaves(*weights, prefix='f'):
    return [Node('%s%d' % (prefix, i), w) for i, w in enumerate(weights)]


@pytest.fixture
def example_tree():
    return Node('root', 100, leaves(50, 30, 15, 5))


@pytest.fixture
def nested_tree():
    src = Node('src', children=leaves(400, 120, 80, 33, 7, 2, prefix='s'))
    docs = Node('docs', children=leaves(300, 90, 10, prefix='d'))
    deep = Node('deep', children=[Node('deeper', children=leaves(60, 40, 20, prefix='x'))])
    return Node('root', children=[src, docs, deep] + leaves(250, 45, 5, 1, prefix='r'))


@pytest.fixture
def config():
    return TreemapConfig(min_tile_size=1)
