from dataclasses import dataclass
from enum import Enum

# slack for float origins, sibling offsets and the remaining rect are summed differently
EPSILON = 1e-9


class Orientation(Enum):
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'
    AUTO = 'auto'

    def resolve(self, rect):
        """AUTO becomes whichever direction splits the longer side of rect"""
        if self is not Orientation.AUTO:
            return self
        if rect.width > rect.height:
            return Orientation.HORIZONTAL
        return Orientation.VERTICAL

    def flipped(self):
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        if self is Orientation.VERTICAL:
            return Orientation.HORIZONTAL
        return self


@dataclass(frozen=True)
class Rect:
    """axis-aligned rectangle in layout space, origin at top left"""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self):
        return self.x + self.width

    @property
    def bottom(self):
        return self.y + self.height

    @property
    def area(self):
        return self.width * self.height

    def is_empty(self):
        return self.width <= 0 or self.height <= 0

    def bounds(self, orientation):
        # (x1, x2) along the given axis
        if orientation is Orientation.HORIZONTAL:
            return self.x, self.right
        return self.y, self.bottom

    def contains(self, other):
        return (other.x >= self.x - EPSILON and other.y >= self.y - EPSILON and
                other.right <= self.right + EPSILON and other.bottom <= self.bottom + EPSILON)

    def overlaps(self, other):
        dx = min(self.right, other.right) - max(self.x, other.x)
        dy = min(self.bottom, other.bottom) - max(self.y, other.y)
        return dx > EPSILON and dy > EPSILON

    def aspect_ratio(self):
        if self.is_empty():
            return float('inf')
        return max(self.width, self.height) / min(self.width, self.height)
