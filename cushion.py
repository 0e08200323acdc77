"""
cushion surfaces, see van Wijk & van de Wetering, "Cushion Treemaps" (1999)

each tile carries a quadratic height field
    z(x, y) = xx2*x^2 + xx1*x + yy2*y^2 + yy1*y
built up one parabolic ridge per axis per nesting level. it is only ever
used to compute surface normals for shading, never for geometry.
"""
from dataclasses import dataclass, replace

from geometry import Orientation

CUSHION_HEIGHT = 1.0


@dataclass(frozen=True)
class CushionSurface:
    xx2: float = 0.0
    xx1: float = 0.0
    yy2: float = 0.0
    yy1: float = 0.0
    height: float = CUSHION_HEIGHT

    def add_ridge(self, axis, height, rect):
        """return a copy with one more ridge of the given height spanning rect along axis"""
        x1, x2 = rect.bounds(axis)
        if axis is Orientation.HORIZONTAL:
            return replace(self,
                           height=height,
                           xx2=square_ridge(self.xx2, height, x1, x2),
                           xx1=linear_ridge(self.xx1, height, x1, x2))
        return replace(self,
                       height=height,
                       yy2=square_ridge(self.yy2, height, x1, x2),
                       yy1=linear_ridge(self.yy1, height, x1, x2))

    def normal(self, x, y):
        return 2.0 * self.xx2 * x + self.xx1, 2.0 * self.yy2 * y + self.yy1

    @property
    def coefficients(self):
        return self.xx2, self.xx1, self.yy2, self.yy1


def square_ridge(coefficient, height, x1, x2):
    if x2 == x1:
        return coefficient
    return coefficient - 4.0 * height / (x2 - x1)


def linear_ridge(coefficient, height, x1, x2):
    if x2 == x1:
        return coefficient
    return coefficient + 4.0 * height * (x2 + x1) / (x2 - x1)
