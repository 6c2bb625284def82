# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import time
import logging
import numpy as np
import hypercube_optimizer.common.typing as tp
from hypercube_optimizer.common import errors
from hypercube_optimizer.common import tools
from hypercube_optimizer.geometry import Point
from hypercube_optimizer.functions import Negated
from .evaluation import PointEval
from .evaluation import EvaluationCache
from .hypercube import Hypercube
from .result import ExitStatus
from .result import OptimizationResult
from .result import IterationRecord
from . import utils

logger = logging.getLogger(__name__)

# number of consecutive iterations with |delta f| <= tol_f required for convergence
CONVERGENCE_WINDOW = 30
_IterationCallback = tp.Callable[["HypercubeOptimizer", IterationRecord], None]


class HypercubeOptimizer:  # pylint: disable=too-many-instance-attributes
    """Derivative-free maximizer sampling a shrinking and moving hypercube.

    At each iteration, the population of the hypercube is resampled and evaluated.
    If the best point of the iteration improves on the previous best point (and on the
    running average of the best values), the hypercube is shrunk by a factor depending
    on the distance between both best points, then moved to their midpoint.

    Parameters
    ----------
    init_point: Point or array-like
        initial point, must lie in [lower, upper] on all axes. Its dimension sets the dimension of the problem.
    lower: float
        lower bound of the search space, on every axis
    upper: float
        upper bound of the search space, on every axis
    tol_x: float
        tolerance on the input space (reserved, not used by the convergence check)
    tol_f: float
        the optimization is considered converged when the best value changes by less
        than tol_f during CONVERGENCE_WINDOW consecutive iterations
    max_loop: int
        maximum number of iterations
    max_eval: int/None
        maximum number of function evaluations, checked between iterations
    max_timeout: float/None
        maximum duration of the optimization in seconds, checked between iterations
    population_size: int/None
        number of points of the hypercube, defaults to the dimension
    random_state: np.random.RandomState/None
        random state for sampling the hypercube population
    """

    def __init__(
        self,
        init_point: tp.Union[Point, tp.ArrayLike],
        lower: float,
        upper: float,
        tol_x: float = 1e-6,
        tol_f: float = 1e-6,
        max_loop: int = 1000,
        max_eval: tp.Optional[int] = None,
        max_timeout: tp.Optional[float] = None,
        population_size: tp.Optional[int] = None,
        random_state: tp.Optional[np.random.RandomState] = None,
    ) -> None:
        init_point = init_point.copy() if isinstance(init_point, Point) else Point(init_point)
        if not (np.isfinite(lower) and np.isfinite(upper)):
            raise errors.InvalidBoundsError(f"Bounds must be finite, got [{lower}, {upper}]")
        if not upper > lower:
            raise errors.InvalidBoundsError(f"Upper bound {upper} not strictly larger than lower bound {lower}")
        if not np.all(np.isfinite(init_point.to_array())):
            raise errors.HypercubeValueError(f"init_point {init_point} must have finite coordinates")
        if init_point.max() > upper:
            raise errors.HypercubeValueError(f"init_point {init_point} not inside upper bound {upper}")
        if init_point.min() < lower:
            raise errors.HypercubeValueError(f"init_point {init_point} not inside lower bound {lower}")
        if max_loop < 0:
            raise errors.HypercubeValueError(f"max_loop must be non-negative, got {max_loop}")
        self.name = self.__class__.__name__
        self.init_point = init_point
        self.lower = float(lower)
        self.upper = float(upper)
        self.tol_x = tol_x
        self.tol_f = tol_f
        self.max_loop = int(max_loop)
        self.max_eval = max_eval
        self.max_timeout = max_timeout
        self.hypercube = Hypercube(
            init_point.dimension, lower, upper, population_size=population_size, random_state=random_state
        )
        self._callbacks: tp.Dict[str, tp.List[_IterationCallback]] = {}
        self._running = False
        self._num_iterations = 0
        self._num_evals = 0
        self._best_seen = EvaluationCache()

    @property
    def dimension(self) -> int:
        return self.init_point.dimension

    @property
    def num_iterations(self) -> int:
        """int: Number of iterations of the current (or last) run"""
        return self._num_iterations

    @property
    def num_evals(self) -> int:
        """int: Number of function evaluations of the current (or last) run"""
        return self._num_evals

    def current_best(self) -> tp.Optional[PointEval]:
        """Best evaluation seen so far during the current (or last) run"""
        return self._best_seen.peek_best()

    def __repr__(self) -> str:
        return (
            f"Instance of {self.name}(dimension={self.dimension}, bounds=[{self.lower}, {self.upper}], "
            f"max_loop={self.max_loop})"
        )

    def register_callback(self, name: str, callback: _IterationCallback) -> None:
        """Add a callback called after each iteration as :code:`callback(optimizer, record)`
        where record is an :code:`IterationRecord`. This can be useful for custom logging.

        Parameters
        ----------
        name: str
            name of the event to register the callback for (only "iteration" is available)
        callback: callable
            a callable taking the optimizer and the iteration record
        """
        assert name == "iteration", f'Only "iteration" callbacks are available (not {name})'
        self._callbacks.setdefault(name, []).append(callback)

    def remove_all_callbacks(self) -> None:
        """Removes all registered callables"""
        self._callbacks = {}

    def _notify(self, record: IterationRecord) -> None:
        for callback in self._callbacks.get("iteration", []):
            callback(self, record)

    def _exhausted_budget(self, start: float) -> tp.Optional[str]:
        if self.max_eval is not None and self._num_evals + self.hypercube.population_size > self.max_eval:
            return f"Evaluation budget exhausted ({self._num_evals} evaluations out of {self.max_eval})"
        if self.max_timeout is not None and time.time() - start >= self.max_timeout:
            return f"Time budget exhausted ({self.max_timeout}s)"
        return None

    def maximize(
        self, objective: tp.Objective, executor: tp.Optional[tp.ExecutorLike] = None
    ) -> OptimizationResult:
        """Searches for the point maximizing the objective function.

        Parameters
        ----------
        objective: callable
            function taking a numpy array and returning a float, it must never return NaN
        executor: ExecutorLike/None
            executor used to evaluate the population of each iteration in parallel
            (eg: :code:`concurrent.futures.ThreadPoolExecutor`). Iterations themselves are sequential.

        Returns
        -------
        OptimizationResult
            exit status, number of iterations and evaluations, best point and value
        """
        if self._running:
            raise errors.HypercubeRuntimeError("maximize is not reentrant")
        self._running = True
        try:
            return self._maximize(objective, executor)
        finally:
            self._running = False

    def minimize(
        self, objective: tp.Objective, executor: tp.Optional[tp.ExecutorLike] = None
    ) -> OptimizationResult:
        """Searches for the point minimizing the objective function, by maximizing its opposite.
        The reported best value is the value of the (non negated) objective.
        """
        result = self.maximize(Negated(objective), executor=executor)
        return result._replace(best_value=None if result.best_value is None else -result.best_value)

    def _maximize(  # pylint: disable=too-many-locals
        self, objective: tp.Objective, executor: tp.Optional[tp.ExecutorLike]
    ) -> OptimizationResult:
        start = time.time()
        hypercube = self.hypercube
        self._best_seen = EvaluationCache()
        self._num_iterations = 0
        previous_best = PointEval.from_function(self.init_point, objective)
        self._num_evals = 1
        self._best_seen.add(previous_best)
        average_f = previous_best.value
        abs_delta_f_window: tp.List[float] = []
        status = ExitStatus.ITERATION_LIMIT_REACHED
        message = f"Reached the maximum number of iterations ({self.max_loop})"
        logger.info(
            "Initial hypercube size: %s, population size: %s",
            hypercube.diagonal_length,
            hypercube.population_size,
        )
        for i in range(self.max_loop):
            exhausted = self._exhausted_budget(start)
            if exhausted is not None:
                message = exhausted
                break
            hypercube.randomize_pop()
            hypercube.evaluate(objective, executor=executor)
            self._num_evals += hypercube.population_size
            self._num_iterations = i + 1
            current_best = hypercube.peek_best_value()
            assert current_best is not None
            self._best_seen.add(max(current_best, previous_best))
            logger.debug("Loop %s of %s, current best: %s, previous best: %s", i, self.max_loop, current_best, previous_best)
            # convergence of the image
            abs_delta_f = abs(current_best.value - previous_best.value)
            if abs_delta_f <= self.tol_f:
                abs_delta_f_window.append(abs_delta_f)
                if len(abs_delta_f_window) >= CONVERGENCE_WINDOW:
                    status = ExitStatus.CONVERGED
                    message = f"Image converged during {CONVERGENCE_WINDOW} consecutive iterations"
                    best = self._best_seen.peek_best()
                    self._notify(IterationRecord(i, best, current_best, None, final=True))  # type: ignore
                    break
            else:
                abs_delta_f_window.clear()
            average_f += (current_best.value - average_f) / (i + 1)
            if current_best.value < average_f or current_best < previous_best:
                logger.debug("Skipping displacement, resampling the hypercube in place")
                self._notify(IterationRecord(i, self._best_seen.peek_best(), current_best, None))  # type: ignore
                continue
            # move and shrink
            new_center = current_best.point.midpoint(previous_best.point)
            distance = utils.renormalized_distance(
                current_best.point, previous_best.point, hypercube.center, hypercube.diagonal
            )
            factor = utils.convergence_factor(distance)
            logger.debug("Renormalized distance %s, shrinking hypercube by %s", distance, factor)
            hypercube.shrink(factor)
            hypercube.displace_to_clamped(new_center)
            previous_best = current_best
            self._notify(IterationRecord(i, self._best_seen.peek_best(), current_best, factor))  # type: ignore
        best = self._best_seen.peek_best()
        logger.info(
            "%s after %s iterations and %s evaluations, final hypercube size: %s",
            message,
            self._num_iterations,
            self._num_evals,
            hypercube.diagonal_length,
        )
        return OptimizationResult(
            status=status,
            message=message,
            iterations=self._num_iterations,
            function_evals=self._num_evals,
            best_point=None if best is None else best.point,
            best_value=None if best is None else best.value,
        )


class ConfiguredHypercubeOptimizer:
    """Creates HypercubeOptimizer instances with a given configuration.

    Parameters
    ----------
    tol_x: float
        tolerance on the input space (reserved)
    tol_f: float
        tolerance on the image for convergence
    max_loop: int
        maximum number of iterations
    max_eval: int/None
        maximum number of function evaluations
    max_timeout: float/None
        maximum duration in seconds
    population_size: int/None
        number of points of the hypercube, defaults to the dimension

    Example
    -------
    >>> configured = ConfiguredHypercubeOptimizer(tol_f=1e-3, max_loop=200)
    >>> optimizer = configured(init_point=[60.0] * 8, lower=0.0, upper=120.0)
    """

    # pylint: disable=unused-argument
    def __init__(
        self,
        tol_x: float = 1e-6,
        tol_f: float = 1e-6,
        max_loop: int = 1000,
        max_eval: tp.Optional[int] = None,
        max_timeout: tp.Optional[float] = None,
        population_size: tp.Optional[int] = None,
    ) -> None:
        config = dict(locals())
        config.pop("self", None)  # self comes from "locals()"
        config.pop("__class__", None)
        self._config = config
        diff = tools.different_from_defaults(instance=self, instance_dict=config, check_mismatches=True)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        self.name = f"{self.__class__.__name__}({params})"

    def config(self) -> tp.Dict[str, tp.Any]:
        return dict(self._config)

    def __call__(
        self,
        init_point: tp.Union[Point, tp.ArrayLike],
        lower: float,
        upper: float,
        random_state: tp.Optional[np.random.RandomState] = None,
    ) -> HypercubeOptimizer:
        """Creates an optimizer with this configuration for the given problem"""
        optimizer = HypercubeOptimizer(init_point, lower, upper, random_state=random_state, **self._config)
        optimizer.name = self.name
        return optimizer

    def __repr__(self) -> str:
        return self.name

    def __eq__(self, other: tp.Any) -> tp.Any:
        if self.__class__ == other.__class__:
            if self._config == other._config:
                return True
        return False
