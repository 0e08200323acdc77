from dataclasses import dataclass, field
from typing import List, NamedTuple

from cushion import CushionSurface
from geometry import Orientation, Rect
from logger import logger
from nodes import sorted_by_weight
from utils import format_bytes

"""
treemap layout: the whole tile tree is computed up front, renderers only
read it afterwards.

two strategies:
- simple: slice along one axis, alternate the axis at each level
- squarified: Bruls, Huizing & van Wijk, "Squarified Treemaps" (2000),
  rows grow while the worst aspect ratio in the row keeps improving

every child tile gets a cushion surface derived from its parent's, see
cushion.py.
"""


class Placement(NamedTuple):
    node: object
    rect: Rect
    surface: CushionSurface
    orientation: Orientation


@dataclass(eq=False)
class Tile:
    node: object
    rect: Rect
    surface: CushionSurface
    depth: int = 0
    children: List['Tile'] = field(default_factory=list)

    def walk(self):
        """all tiles of this subtree, depth first, parents before children"""
        stack = [self]
        while stack:
            tile = stack.pop()
            yield tile
            stack.extend(reversed(tile.children))

    def leaves(self):
        for tile in self.walk():
            if tile.node.is_leaf():
                yield tile

    def __repr__(self):
        return '<Tile %s %r depth=%d children=%d>' % (
            getattr(self.node, 'name', self.node), self.rect, self.depth, len(self.children))


def compute_tiles(node, rect, config):
    """lay out the whole tree below node inside rect, return the root tile"""
    config.validate()

    root = Tile(node, rect, CushionSurface(height=config.cushion_height))
    stack = [(root, config.orientation)]
    count = 1
    # explicit stack, tree depth is whatever the filesystem gives us
    while stack:
        tile, orientation = stack.pop()
        if config.max_depth is not None and tile.depth >= config.max_depth:
            continue
        for placement in subdivide(tile.node, tile.rect, tile.surface, orientation, config):
            child = Tile(placement.node, placement.rect, placement.surface, tile.depth + 1)
            tile.children.append(child)
            stack.append((child, placement.orientation))
            count += 1

    logger.debug('%d tiles for %s (%s) in %s' % (
        count, getattr(node, 'name', node), format_bytes(node.weight()), rect))
    return root


def subdivide(node, rect, surface, orientation, config):
    """place the children of node inside rect, one level only"""
    if rect.is_empty() or node.is_leaf() or node.weight() <= 0:
        return []
    if config.squarify:
        return squarify(node, rect, surface, config)
    return split_simple(node, rect, surface, orientation, config)


def visible_children(node, min_weight):
    """children big enough to get a tile, largest first"""
    return sorted_by_weight(c for c in node.children()
                            if c.weight() > 0 and c.weight() >= min_weight)


def split_simple(node, rect, surface, orientation, config):
    direction = orientation.resolve(rect)
    child_orientation = orientation.flipped()

    primary = int(rect.width if direction is Orientation.HORIZONTAL else rect.height)
    if primary <= 0:
        return []
    scale = primary / node.weight()
    children = visible_children(node, config.min_tile_size / scale)

    base = surface.add_ridge(direction.flipped(), surface.height, rect)
    child_height = surface.height * config.height_scale_factor

    placements = []
    offset = 0
    for child in children:
        # rounding error is not redistributed, but never run past the parent
        size = min(_round(scale * child.weight()), primary - offset)
        if size <= 0 or size < config.min_tile_size:
            continue
        if direction is Orientation.HORIZONTAL:
            child_rect = Rect(rect.x + offset, rect.y, size, rect.height)
        else:
            child_rect = Rect(rect.x, rect.y + offset, rect.width, size)

        child_surface = base.add_ridge(direction, child_height, child_rect)
        placements.append(Placement(child, child_rect, child_surface, child_orientation))
        offset += size

    return placements


def squarify(node, rect, surface, config):
    scale = rect.area / node.weight()
    children = visible_children(node, config.min_tile_size / scale)

    placements = []
    remaining = rect
    start = 0
    while start < len(children):
        length = max(remaining.width, remaining.height)
        if length <= 0:
            logger.trace('no room left in %s, dropping %d children' % (rect, len(children) - start))
            break

        row = best_row(children[start:], length, scale)
        placed, remaining = layout_row(row, remaining, scale, surface, config)
        if remaining is None:
            logger.trace('row too thin in %s, dropping %d children' % (rect, len(children) - start))
            break
        placements.extend(placed)
        start += len(row)

    return placements


def best_row(candidates, length, scale):
    """longest prefix of candidates whose worst aspect ratio keeps improving

    candidates must be sorted largest first with positive weights, so the
    worst ratio only depends on the first and the last one in the row.
    """
    # work in weight units, only one scaling needed
    scaled_length_square = length * length / scale
    first = candidates[0].weight()

    row_sum = 0
    last_worst = None
    count = 0
    for candidate in candidates:
        weight = candidate.weight()
        new_sum = row_sum + weight
        sum_square = new_sum * new_sum
        worst = max(scaled_length_square * first / sum_square,
                    sum_square / (scaled_length_square * weight))
        if last_worst is not None and worst >= last_worst:
            break
        last_worst = worst
        row_sum = new_sum
        count += 1

    return candidates[:count]


def layout_row(row, rect, scale, surface, config):
    """place one row along the longer side of rect

    returns the placements and what is left of rect, or (.., None) when the
    row would be too thin to show.
    """
    direction = Orientation.HORIZONTAL if rect.width > rect.height else Orientation.VERTICAL
    primary = int(max(rect.width, rect.height))
    row_sum = sum(n.weight() for n in row)
    if primary <= 0 or row_sum <= 0:
        return [], None

    secondary = min(int(row_sum * scale / primary), int(min(rect.width, rect.height)))
    if secondary < max(config.min_tile_size, 1):
        return [], None

    # one ridge across the row groups its tiles together visually
    row_surface = surface.add_ridge(direction.flipped(), surface.height * config.height_scale_factor, rect)
    child_height = row_surface.height * config.height_scale_factor

    placements = []
    offset = 0
    remaining = primary
    for node in row:
        size = min(_round(node.weight() / row_sum * primary), remaining)
        remaining -= size
        if size <= 0 or size < config.min_tile_size:
            continue

        if direction is Orientation.HORIZONTAL:
            child_rect = Rect(rect.x + offset, rect.y, size, secondary)
        else:
            child_rect = Rect(rect.x, rect.y + offset, secondary, size)

        child_surface = row_surface.add_ridge(direction, child_height, child_rect)
        placements.append(Placement(node, child_rect, child_surface, Orientation.AUTO))
        offset += size

    if direction is Orientation.HORIZONTAL:
        rest = Rect(rect.x, rect.y + secondary, rect.width, rect.height - secondary)
    else:
        rest = Rect(rect.x + secondary, rect.y, rect.width - secondary, rect.height)
    return placements, rest


def _round(value):
    # half up, like the pixel math everywhere else
    return int(value + 0.5)
