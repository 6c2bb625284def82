# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import numpy as np
import hypercube_optimizer.common.typing as tp
from hypercube_optimizer.common import errors
from hypercube_optimizer.geometry import Point


class DelayedJob:
    """Future-like object which delays computation
    """

    def __init__(self, func: tp.Callable[..., tp.Any], *args: tp.Any, **kwargs: tp.Any) -> None:
        self.func = func
        self.args = args
        self.kwargs = kwargs
        self._result: tp.Optional[tp.Any] = None
        self._computed = False

    def done(self) -> bool:
        return True

    def result(self) -> tp.Any:
        if not self._computed:
            self._result = self.func(*self.args, **self.kwargs)
            self._computed = True
        return self._result


class SequentialExecutor:
    """Executor which run sequentially and locally
    (just calls the function and returns a DelayedJob)
    """

    def submit(self, fn: tp.Callable[..., tp.Any], *args: tp.Any, **kwargs: tp.Any) -> DelayedJob:
        return DelayedJob(fn, *args, **kwargs)


def renormalized_distance(first: Point, second: Point, center: Point, diagonal: Point) -> float:
    """Distance between two points once expressed relatively to the center and the
    span of a hypercube, divided by sqrt(dimension) so that it lies roughly in [0, 1]
    """
    normalized = [(x - center) / diagonal for x in (first, second)]
    return (normalized[0] - normalized[1]).length() / math.sqrt(first.dimension)


def convergence_factor(distance: float) -> float:
    """Shrink factor derived from the renormalized distance between the last two best points.
    0 gives 0.8 (strong shrink around a converged region), and the factor tends towards 1
    (almost no shrink, still exploring) as the distance grows.
    """
    if distance < 0 or np.isnan(distance):
        raise errors.HypercubeValueError(f"Distance must be a non-negative number, got {distance}")
    # stays strictly below 1 even when exp underflows
    return min(1.0 - 0.2 * math.exp(-3.0 * distance), float(np.nextafter(1.0, 0.0)))
