# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
import warnings
import numpy as np
import hypercube_optimizer.common.typing as tp
from hypercube_optimizer.common import errors
from hypercube_optimizer.geometry import Point
from hypercube_optimizer.geometry import HypercubeBounds
from hypercube_optimizer.geometry import Containment
from .evaluation import PointEval
from .evaluation import EvaluationCache
from . import utils

logger = logging.getLogger(__name__)


class Hypercube:  # pylint: disable=too-many-instance-attributes
    """Search region with its population of sample points.

    The hypercube keeps track of the bounds it was initialized with, and
    never leaves them: every point of the population lies in the current
    bounds, which lie in the initial bounds. Evaluations of the population are
    cleared whenever the population moves (shrink, displacement, randomization).

    Parameters
    ----------
    dimension: int
        dimension of the search space
    lower: float
        lower bound of the initial hypercube, on every axis
    upper: float
        upper bound of the initial hypercube, on every axis
    population_size: int/None
        number of sample points, defaults to the dimension
    random_state: np.random.RandomState/None
        random state used for sampling the population (a new unseeded one if not provided)
    """

    def __init__(
        self,
        dimension: int,
        lower: float,
        upper: float,
        population_size: tp.Optional[int] = None,
        random_state: tp.Optional[np.random.RandomState] = None,
    ) -> None:
        self._init_bounds = HypercubeBounds.new(dimension, lower, upper)
        self._current_bounds = self._init_bounds.copy()
        self._dimension = int(dimension)
        self._center = self._current_bounds.center
        self._diagonal = self._current_bounds.diagonal
        self._population_size = self._dimension if population_size is None else int(population_size)
        if self._population_size <= 0:
            raise errors.HypercubeValueError(f"Population size must be strictly positive, got {population_size}")
        if self._population_size == 1:
            warnings.warn("A population of 1 point makes the search very noisy", errors.InefficientSettingsWarning)
        self._random_state = np.random.RandomState() if random_state is None else random_state
        self._population: tp.List[Point] = []
        self._evaluations = EvaluationCache()
        self.randomize_pop()

    # properties

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def init_bounds(self) -> HypercubeBounds:
        return self._init_bounds.copy()

    @property
    def current_bounds(self) -> HypercubeBounds:
        return self._current_bounds.copy()

    @property
    def center(self) -> Point:
        return self._center.copy()

    @property
    def diagonal(self) -> Point:
        return self._diagonal.copy()

    @property
    def diagonal_length(self) -> float:
        return self._diagonal.length()

    @property
    def population_size(self) -> int:
        return self._population_size

    @property
    def population(self) -> tp.List[Point]:
        return [p.copy() for p in self._population]

    @property
    def values(self) -> tp.List[PointEval]:
        """Evaluations of the current population, in population order"""
        return self._evaluations.values

    @property
    def random_state(self) -> np.random.RandomState:
        return self._random_state

    # evaluation

    def evaluate(self, objective: tp.Objective, executor: tp.Optional[tp.ExecutorLike] = None) -> None:
        """Evaluates the objective function on all points of the population and stores the results.

        Parameters
        ----------
        objective: callable
            function taking a numpy array and returning a float (never NaN)
        executor: ExecutorLike/None
            executor with a :code:`submit` method (eg: :code:`concurrent.futures.ThreadPoolExecutor`)
            for evaluating the population in parallel. Defaults to sequential evaluation.

        Note
        ----
        Evaluations accumulate: evaluating twice without moving or randomizing the
        population stores duplicate entries.
        """
        if executor is None:
            executor = utils.SequentialExecutor()
        jobs = [executor.submit(PointEval.from_function, point, objective) for point in self._population]
        # all results are gathered (in population order) before being inserted
        evaluations = [job.result() for job in jobs]
        for evaluation in evaluations:
            self._evaluations.add(evaluation)

    def peek_best_value(self) -> tp.Optional[PointEval]:
        return self._evaluations.peek_best()

    def pop_best_value(self) -> tp.Optional[PointEval]:
        return self._evaluations.pop_best()

    # population updates

    def randomize_pop(self) -> None:
        """Regenerates the population uniformly inside the current bounds and erases previous evaluations"""
        lower, upper = self._current_bounds.lower.to_array(), self._current_bounds.upper.to_array()
        self._population = [
            Point.random(self._dimension, lower, upper, random_state=self._random_state)
            for _ in range(self._population_size)
        ]
        self._evaluations.clear()

    def _check_dimension(self, vector: Point) -> None:
        if vector.dimension != self._dimension:
            raise errors.DimensionMismatchError(
                f"Vector is not the correct size: expected {self._dimension}, got {vector.dimension}"
            )

    def _translate(self, vector: Point, new_bounds: HypercubeBounds) -> None:
        for point in self._population:
            point += vector
        self._current_bounds = new_bounds
        self._center += vector
        self._evaluations.clear()

    def displace_by(self, vector: Point) -> None:
        """Displaces the hypercube (bounds, center and population) by vector

        Raises
        ------
        DisplacementOutOfBoundsError
            if the displaced hypercube would not fit in the initial bounds.
            The hypercube is left untouched in this case.
        """
        self._check_dimension(vector)
        new_bounds = self._current_bounds.displace_by(vector)
        containment = new_bounds.within(self._init_bounds)
        if containment != Containment.NONE_OUT_OF_BOUNDS:
            raise errors.DisplacementOutOfBoundsError(
                f"Cannot displace by {vector}, displacement results in hypercube out of bounds ({containment.name})"
            )
        self._translate(vector, new_bounds)

    def displace_to(self, destination: Point) -> None:
        """Displaces the hypercube so that its center is destination

        Raises
        ------
        DisplacementOutOfBoundsError
            if the displaced hypercube would not fit in the initial bounds.
            The hypercube is left untouched in this case.
        """
        self._check_dimension(destination)
        self.displace_by(destination - self._center)

    def displace_to_clamped(self, destination: Point) -> None:
        """Displaces the hypercube towards destination, sliding it back into the
        initial bounds if needed. Contrarily to :code:`displace_to`, this always succeeds,
        the center ends as close as possible to destination.
        """
        self._check_dimension(destination)
        vector = destination - self._center
        new_bounds = self._current_bounds.displace_by(vector)
        if new_bounds.within(self._init_bounds) != Containment.NONE_OUT_OF_BOUNDS:
            new_bounds = new_bounds.clamp(self._init_bounds)
            vector = new_bounds.center - self._center
            logger.debug("Clamped displacement towards %s to a displacement by %s", destination, vector)
        self._translate(vector, new_bounds)

    def shrink(self, factor: float) -> None:
        """Shrinks the current bounds and the population towards the center.
        This eliminates the previously computed evaluations.

        Parameters
        ----------
        factor: float
            shrink factor in (0, 1], 1 leaves the hypercube unchanged
        """
        if not 0.0 < factor <= 1.0:
            raise errors.FactorOutOfRangeError(f"Shrink factor must be in (0, 1], got {factor}")
        self._current_bounds = self._current_bounds.shrink_towards_center(self._center, factor)
        for point in self._population:
            point.shrink_towards_center_in_place(self._center, factor)
        self._diagonal = self._current_bounds.diagonal
        self._evaluations.clear()

    def __repr__(self) -> str:
        return (
            f"Hypercube(dimension={self._dimension}, population_size={self._population_size}, "
            f"bounds={self._current_bounds})"
        )

    def __str__(self) -> str:
        return (
            f"Dimension: {self._dimension}\nCurrent bounds: {self._current_bounds}\n"
            f"Center: {self._center}\nDiagonal length: {self.diagonal_length:.2f}\n"
            f"Population size: {self._population_size}\nValues: {self.values}\n"
        )
