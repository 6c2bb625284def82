# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import heapq
import functools
import itertools
import hypercube_optimizer.common.typing as tp
from hypercube_optimizer.common import errors
from hypercube_optimizer.geometry import Point


@functools.total_ordering
class PointEval:
    """Point paired with its image through the objective function.
    Evaluations are compared using their image only.

    Parameters
    ----------
    point: Point
        the argument of the objective function
    image: float
        the (non-NaN) value of the objective function at point
    """

    __hash__ = None  # type: ignore

    def __init__(self, point: Point, image: float) -> None:
        image = float(image)
        if math.isnan(image):
            raise errors.NaNImageError(f"Function evaluated at {point} returned {image}")
        self._point = point.copy()
        self._image = image

    @classmethod
    def from_function(cls, point: Point, objective: tp.Objective) -> "PointEval":
        """Evaluates the objective at point (as a numpy array) and wraps the result"""
        return cls(point, objective(point.to_array()))

    @property
    def point(self) -> Point:
        return self._point.copy()

    @property
    def value(self) -> float:
        return self._image

    def __eq__(self, other: tp.Any) -> bool:
        if not isinstance(other, PointEval):
            return NotImplemented
        return self._image == other._image

    def __lt__(self, other: "PointEval") -> bool:
        if not isinstance(other, PointEval):
            return NotImplemented
        return self._image < other._image

    def __repr__(self) -> str:
        return f"PointEval(point={self._point.to_array().tolist()}, value={self._image})"


class EvaluationCache:
    """Evaluations of a population, available both in insertion order
    and through a max-ordered queue.
    The cache is meant to be either empty or filled with the evaluations of the whole
    current population: owners must call :code:`clear` whenever the population changes.
    """

    def __init__(self) -> None:
        self._values: tp.List[PointEval] = []
        # min-heap on negated images, the counter keeps the order stable on ties
        self._queue: tp.List[tp.Tuple[float, int, PointEval]] = []
        self._counter = itertools.count()

    def add(self, evaluation: PointEval) -> None:
        self._values.append(evaluation)
        heapq.heappush(self._queue, (-evaluation.value, next(self._counter), evaluation))

    def peek_best(self) -> tp.Optional[PointEval]:
        """Returns the evaluation with maximal image, or None if there are no (remaining) evaluations"""
        return self._queue[0][2] if self._queue else None

    def pop_best(self) -> tp.Optional[PointEval]:
        """Removes and returns the evaluation with maximal image, or None if there are no (remaining) evaluations"""
        return heapq.heappop(self._queue)[2] if self._queue else None

    @property
    def values(self) -> tp.List[PointEval]:
        """All evaluations, in insertion order (not affected by pop_best)"""
        return list(self._values)

    def clear(self) -> None:
        self._values.clear()
        self._queue.clear()

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return bool(self._values)

    def __repr__(self) -> str:
        return f"EvaluationCache<{len(self)} evaluations, best: {self.peek_best()}>"
