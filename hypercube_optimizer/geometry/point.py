# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import hypercube_optimizer.common.typing as tp
from hypercube_optimizer.common import errors

if tp.TYPE_CHECKING:
    from .bounds import HypercubeBounds  # pylint: disable=cyclic-import


def check_factor(factor: float) -> float:
    """Checks that a shrink factor lies in [0, 1] and returns it as a float"""
    factor = float(factor)
    if not 0.0 <= factor <= 1.0:
        raise errors.FactorOutOfRangeError(f"Shrink factor must be in [0, 1], got {factor}")
    return factor


class Point:
    """Real vector with a dimension which is fixed at construction.
    Arithmetic operators act elementwise and require operands of the same
    dimension, they always return new points except for the in-place variants
    (:code:`+=`, :code:`-=`, :code:`scale_in_place`, :code:`shrink_towards_center_in_place`)
    which only mutate the coordinates.

    Parameters
    ----------
    values: iterable of floats
        coordinates of the point (at least one)
    """

    __hash__ = None  # type: ignore  # mutable

    def __init__(self, values: tp.Iterable[float]) -> None:
        if not isinstance(values, np.ndarray):
            values = list(values)
        coords = np.array(values, dtype=float)
        if coords.ndim != 1:
            raise errors.HypercubeValueError(f"Points must be one dimensional arrays, got shape {coords.shape}")
        if not coords.size:
            raise errors.EmptyPointError("Point dimension cannot be zero")
        self._coords = coords

    # constructors

    @classmethod
    def from_values(cls, values: tp.Iterable[float]) -> "Point":
        return cls(values)

    @classmethod
    def fill(cls, value: float, dimension: int) -> "Point":
        """Creates a point of given dimension with all coordinates equal to value"""
        return cls(np.full(int(dimension), value, dtype=float))

    @classmethod
    def random(
        cls,
        dimension: int,
        lower: tp.BoundValue,
        upper: tp.BoundValue,
        random_state: tp.Optional[np.random.RandomState] = None,
    ) -> "Point":
        """Draws a point uniformly in the half-open interval [lower, upper) on each axis
        (lower and upper are scalars, or one value per axis)
        """
        lower_arr, upper_arr = (np.broadcast_to(np.asarray(b, dtype=float), (int(dimension),)) for b in (lower, upper))
        if np.any(upper_arr < lower_arr):
            raise errors.InvalidBoundsError(f"Lower bound {lower} is bigger than upper bound {upper}")
        rng = np.random if random_state is None else random_state
        return cls(rng.uniform(lower_arr, upper_arr))

    # accessors

    @property
    def dimension(self) -> int:
        return int(self._coords.size)

    def get(self, index: int) -> tp.Optional[float]:
        """Returns the coordinate at index, or None if the index is out of range"""
        if 0 <= index < self.dimension:
            return float(self._coords[index])
        return None

    def __getitem__(self, index: int) -> float:
        return float(self._coords[index])

    def __iter__(self) -> tp.Iterator[float]:
        return (float(x) for x in self._coords)

    def __len__(self) -> int:
        return self.dimension

    def to_array(self) -> np.ndarray:
        """Returns a copy of the coordinates"""
        return np.array(self._coords, copy=True)

    def __array__(self, dtype: tp.Any = None, copy: tp.Any = None) -> np.ndarray:
        return self.to_array() if dtype is None else self.to_array().astype(dtype)

    def copy(self) -> "Point":
        return Point(self._coords)

    def __eq__(self, other: tp.Any) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.dimension == other.dimension and bool(np.array_equal(self._coords, other._coords))

    def __repr__(self) -> str:
        return f"Point({self._coords.tolist()})"

    # reductions

    def length(self) -> float:
        """Euclidean norm"""
        return float(np.linalg.norm(self._coords))

    def sum(self) -> float:
        return float(np.sum(self._coords))

    def max(self) -> float:
        return float(np.max(self._coords))

    def min(self) -> float:
        return float(np.min(self._coords))

    # arithmetic

    def _check_dimension(self, other: "Point") -> None:
        if not isinstance(other, Point):
            raise errors.HypercubeValueError(f"Expected a Point but got {other!r}")
        if other.dimension != self.dimension:
            raise errors.DimensionMismatchError(
                f"Operands do not have the same dimension: expected {self.dimension}, got {other.dimension}"
            )

    def __add__(self, other: "Point") -> "Point":
        self._check_dimension(other)
        return Point(self._coords + other._coords)

    def __sub__(self, other: "Point") -> "Point":
        self._check_dimension(other)
        return Point(self._coords - other._coords)

    def __mul__(self, other: "Point") -> "Point":
        self._check_dimension(other)
        return Point(self._coords * other._coords)

    def __truediv__(self, other: "Point") -> "Point":
        self._check_dimension(other)
        return Point(self._coords / other._coords)

    def __neg__(self) -> "Point":
        return Point(-self._coords)

    def __iadd__(self, other: "Point") -> "Point":
        self._check_dimension(other)
        self._coords += other._coords
        return self

    def __isub__(self, other: "Point") -> "Point":
        self._check_dimension(other)
        self._coords -= other._coords
        return self

    add = __add__
    subtract = __sub__
    multiply = __mul__
    divide = __truediv__

    def scale(self, factor: float) -> "Point":
        return Point(self._coords * float(factor))

    def scale_in_place(self, factor: float) -> None:
        self._coords *= float(factor)

    def midpoint(self, other: "Point") -> "Point":
        self._check_dimension(other)
        return Point((self._coords + other._coords) / 2.0)

    # geometry

    def clamp(self, bounds: "HypercubeBounds") -> "Point":
        """Returns a new point where each coordinate i is clamped
        into [bounds.lower[i], bounds.upper[i]]
        """
        self._check_dimension(bounds.lower)
        lower, upper = bounds.lower._coords, bounds.upper._coords
        return Point(np.minimum(np.maximum(self._coords, lower), upper))

    def shrink_towards_center_in_place(self, center: "Point", factor: float) -> None:
        """Moves the point to center + (self - center) * factor

        Parameters
        ----------
        center: Point
            reference point
        factor: float
            in [0, 1], 0 collapses the point onto the center, 1 leaves it unchanged
        """
        factor = check_factor(factor)
        self._check_dimension(center)
        self._coords = center._coords + (self._coords - center._coords) * factor

    def shrink_towards_center(self, center: "Point", factor: float) -> "Point":
        point = self.copy()
        point.shrink_towards_center_in_place(center, factor)
        return point
