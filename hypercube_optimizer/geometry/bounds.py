# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from enum import Enum
import numpy as np
import hypercube_optimizer.common.typing as tp
from hypercube_optimizer.common import errors
from .point import Point
from .point import check_factor


class Containment(Enum):
    """Position of a region with respect to a limiting region.
    Disjoint regions are reported as BOTH_OUT_OF_BOUNDS since no clamp is legal for them.
    """

    NONE_OUT_OF_BOUNDS = 0
    LOWER_OUT_OF_BOUNDS = 1
    UPPER_OUT_OF_BOUNDS = 2
    BOTH_OUT_OF_BOUNDS = 3


class HypercubeBounds:
    """Axis-aligned hyper-rectangle described by its lower and upper corners.

    Parameters
    ----------
    lower: Point
        lower corner
    upper: Point
        upper corner, with the same dimension as the lower corner

    Note
    ----
    Only :code:`HypercubeBounds.new` checks that upper > lower. Corners are
    handled symbolically by the other methods, which do not rely on the corners
    being sorted on each axis.
    """

    __hash__ = None  # type: ignore

    def __init__(self, lower: Point, upper: Point) -> None:
        if lower.dimension != upper.dimension:
            raise errors.DimensionMismatchError(
                f"Corners do not have the same dimension: {lower.dimension} and {upper.dimension}"
            )
        self._lower = lower.copy()
        self._upper = upper.copy()

    @classmethod
    def new(cls, dimension: int, lower: float, upper: float) -> "HypercubeBounds":
        """Creates hyper-cubic bounds by broadcasting the lower and upper scalars to all axes"""
        if int(dimension) <= 0:
            raise errors.HypercubeValueError(f"Dimension must be strictly positive, got {dimension}")
        if not (np.isfinite(lower) and np.isfinite(upper)):
            raise errors.InvalidBoundsError(f"Bounds must be finite, got [{lower}, {upper}]")
        if not upper > lower:
            raise errors.InvalidBoundsError(
                f"Upper bound {upper} is not strictly larger than lower bound {lower}"
            )
        return cls(Point.fill(lower, dimension), Point.fill(upper, dimension))

    @property
    def dimension(self) -> int:
        return self._lower.dimension

    @property
    def lower(self) -> Point:
        return self._lower

    @property
    def upper(self) -> Point:
        return self._upper

    @property
    def diagonal(self) -> Point:
        """Vector from the lower corner to the upper corner"""
        return self._upper - self._lower

    @property
    def center(self) -> Point:
        return self._lower.midpoint(self._upper)

    @property
    def side_length(self) -> float:
        """Common span of all axes, only available for hyper-cubic bounds"""
        diagonal = self.diagonal.to_array()
        if not np.allclose(diagonal, diagonal[0]):
            raise errors.HypercubeValueError(f"Bounds are not hyper-cubic, spans are {diagonal.tolist()}")
        return float(diagonal[0])

    def copy(self) -> "HypercubeBounds":
        return HypercubeBounds(self._lower, self._upper)

    def __eq__(self, other: tp.Any) -> bool:
        if not isinstance(other, HypercubeBounds):
            return NotImplemented
        return self._lower == other._lower and self._upper == other._upper

    def __repr__(self) -> str:
        return f"HypercubeBounds(lower={self._lower.to_array().tolist()}, upper={self._upper.to_array().tolist()})"

    def _check_dimension(self, other: "HypercubeBounds") -> None:
        if other.dimension != self.dimension:
            raise errors.DimensionMismatchError(
                f"Bounds do not have the same dimension: expected {self.dimension}, got {other.dimension}"
            )

    def contains(self, point: Point) -> bool:
        """Whether the point lies inside the bounds (borders included)"""
        return point.clamp(self) == point

    def within(self, rhs: "HypercubeBounds") -> Containment:
        """Classifies how these bounds sit with respect to the limiting bounds rhs"""
        self._check_dimension(rhs)
        lower, upper = self._lower.to_array(), self._upper.to_array()
        lim_lower, lim_upper = rhs._lower.to_array(), rhs._upper.to_array()
        if np.any(upper < lim_lower) or np.any(lower > lim_upper):
            return Containment.BOTH_OUT_OF_BOUNDS  # disjoint
        upper_out = bool(np.any(upper > lim_upper))
        lower_out = bool(np.any(lower < lim_lower))
        if upper_out and lower_out:
            return Containment.BOTH_OUT_OF_BOUNDS
        if upper_out:
            return Containment.UPPER_OUT_OF_BOUNDS
        if lower_out:
            return Containment.LOWER_OUT_OF_BOUNDS
        return Containment.NONE_OUT_OF_BOUNDS

    def displace_by(self, vector: Point) -> "HypercubeBounds":
        """Translates both corners by vector"""
        return HypercubeBounds(self._lower + vector, self._upper + vector)

    def scale_in_place(self, factor: float) -> None:
        """Multiplies both corners by factor"""
        self._lower.scale_in_place(factor)
        self._upper.scale_in_place(factor)

    def shrink_towards_center(self, center: Point, factor: float) -> "HypercubeBounds":
        """Moves both corners towards center, factor must be in [0, 1]"""
        factor = check_factor(factor)
        return HypercubeBounds(
            self._lower.shrink_towards_center(center, factor), self._upper.shrink_towards_center(center, factor)
        )

    # the clamped corner is used as is so that it lies exactly in the limit,
    # the induced displacement is then applied to the other corner

    def _slide_lower(self, limit: "HypercubeBounds") -> "HypercubeBounds":
        lower = self._lower.clamp(limit)
        return HypercubeBounds(lower, self._upper + (lower - self._lower))

    def _slide_upper(self, limit: "HypercubeBounds") -> "HypercubeBounds":
        upper = self._upper.clamp(limit)
        return HypercubeBounds(self._lower + (upper - self._upper), upper)

    def clamp(self, limit: "HypercubeBounds") -> "HypercubeBounds":
        """Translates the bounds so that they fit into limit, preserving their size.
        The displacement induced by clamping the offending corner is applied to
        the other corner as well. When both corners are out of bounds, the lower
        corner is handled first, then the upper corner of the resulting bounds.
        """
        containment = self.within(limit)
        if containment == Containment.NONE_OUT_OF_BOUNDS:
            return self.copy()
        if containment == Containment.UPPER_OUT_OF_BOUNDS:
            return self._slide_upper(limit)
        if containment == Containment.LOWER_OUT_OF_BOUNDS:
            return self._slide_lower(limit)
        return self._slide_lower(limit)._slide_upper(limit)
