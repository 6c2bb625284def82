# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from enum import Enum
import hypercube_optimizer.common.typing as tp
from hypercube_optimizer.geometry import Point
from .evaluation import PointEval


class ExitStatus(Enum):
    """Reason why the optimization loop stopped"""

    CONVERGED = 0
    ITERATION_LIMIT_REACHED = 1


class OptimizationResult(tp.NamedTuple):
    """Summary of an optimization run"""

    status: ExitStatus
    message: str
    iterations: int
    function_evals: int
    best_point: tp.Optional[Point]
    best_value: tp.Optional[float]

    @property
    def success(self) -> bool:
        return self.status == ExitStatus.CONVERGED


class IterationRecord(tp.NamedTuple):
    """Information provided to the iteration callbacks after each iteration

    Attributes
    ----------
    iteration: int
        index of the iteration (starting at 0)
    best: PointEval
        best evaluation seen so far
    current: PointEval
        best evaluation of this iteration
    factor: float or None
        shrink factor applied to the hypercube, None if the hypercube was not moved
    final: bool
        whether this iteration ended the run by convergence (the hypercube is then not moved either)
    """

    iteration: int
    best: PointEval
    current: PointEval
    factor: tp.Optional[float]
    final: bool = False

    @property
    def skipped(self) -> bool:
        """Whether the displacement was skipped because the iteration did not improve"""
        return self.factor is None and not self.final
