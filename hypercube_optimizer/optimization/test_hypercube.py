# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import warnings
from concurrent import futures
import pytest
import numpy as np
import hypercube_optimizer.common.typing as tp
from hypercube_optimizer.common import errors
from hypercube_optimizer.common import testing
from hypercube_optimizer.geometry import Point
from hypercube_optimizer.geometry import HypercubeBounds
from hypercube_optimizer.geometry import Containment
from hypercube_optimizer.functions import corefuncs
from .hypercube import Hypercube


def _check_invariants(hypercube: Hypercube) -> None:
    assert hypercube.current_bounds.within(hypercube.init_bounds) == Containment.NONE_OUT_OF_BOUNDS
    testing.assert_points_almost_equal(hypercube.center, hypercube.current_bounds.center)
    bounds = hypercube.current_bounds
    tolerance = Point.fill(1e-9, hypercube.dimension)
    loose = HypercubeBounds(bounds.lower - tolerance, bounds.upper + tolerance)
    for point in hypercube.population:
        assert loose.contains(point), f"{point} is not in {bounds}"


def test_new_hypercube() -> None:
    hypercube = Hypercube(3, 34.0, 120.0)
    expected_bounds = HypercubeBounds.new(3, 34.0, 120.0)
    assert hypercube.current_bounds == expected_bounds
    assert hypercube.init_bounds == expected_bounds
    assert not hypercube.values
    assert hypercube.diagonal == Point.fill(86.0, 3)
    assert hypercube.population_size == 3
    assert len(hypercube.population) == 3
    assert hypercube.center == Point.fill(77.0, 3)
    assert hypercube.dimension == 3
    assert hypercube.peek_best_value() is None
    _check_invariants(hypercube)


@testing.parametrized(
    zero_dimension=(0, 34.0, 120.0),
    reversed_bounds=(5, 120.0, 34.0),
    negative_reversed_bounds=(5, -3.0, -37.0),
    infinite_upper=(5, 0.0, float("inf")),
)
def test_new_hypercube_errors(dimension: int, lower: float, upper: float) -> None:
    with pytest.raises(errors.HypercubeValueError):
        Hypercube(dimension, lower, upper)


def test_population_size() -> None:
    hypercube = Hypercube(2, 0.0, 1.0, population_size=12)
    assert len(hypercube.population) == 12
    with pytest.raises(errors.HypercubeValueError):
        Hypercube(2, 0.0, 1.0, population_size=0)
    with pytest.warns(errors.InefficientSettingsWarning):
        Hypercube(1, 0.0, 1.0)


def test_seeded_population() -> None:
    first, second = (Hypercube(4, 0.0, 1.0, random_state=np.random.RandomState(12)) for _ in range(2))
    assert first.population == second.population


def test_evaluate() -> None:
    hypercube = Hypercube(5, 30.4, 105.0)
    hypercube.evaluate(corefuncs.rastrigin)
    assert len(hypercube.values) == 5
    for point, evaluation in zip(hypercube.population, hypercube.values):
        assert evaluation.point == point
        np.testing.assert_almost_equal(evaluation.value, corefuncs.rastrigin(point.to_array()))
    # evaluations accumulate when the population is not cleared
    hypercube.evaluate(corefuncs.rastrigin)
    assert len(hypercube.values) == 10
    hypercube.randomize_pop()
    assert not hypercube.values


def test_evaluate_with_executor() -> None:
    hypercube = Hypercube(6, 0.0, 10.0, population_size=20)
    with futures.ThreadPoolExecutor(max_workers=4) as executor:
        hypercube.evaluate(corefuncs.sphere, executor=executor)
    assert [e.point for e in hypercube.values] == hypercube.population


def test_pop_best_value_is_non_increasing() -> None:
    hypercube = Hypercube(4, -5.12, 5.12, population_size=30)
    hypercube.evaluate(corefuncs.rastrigin)
    values = []
    best = hypercube.pop_best_value()
    while best is not None:
        values.append(best.value)
        best = hypercube.pop_best_value()
    assert len(values) == 30
    assert all(x >= y for x, y in zip(values, values[1:]))
    assert values[0] == max(e.value for e in hypercube.values)


def test_displace_by_out_of_bounds() -> None:
    hypercube = Hypercube(5, 30.4, 105.0)
    hypercube.evaluate(corefuncs.sphere)
    population = hypercube.population
    with pytest.raises(errors.DisplacementOutOfBoundsError):
        hypercube.displace_by(Point.fill(0.01, 5))
    # nothing changed
    assert hypercube.population == population
    assert hypercube.current_bounds == HypercubeBounds.new(5, 30.4, 105.0)
    assert len(hypercube.values) == 5


def test_displace_by_dimension_mismatch() -> None:
    hypercube = Hypercube(5, 30.4, 105.0)
    hypercube.shrink(0.5)
    with pytest.raises(errors.DimensionMismatchError):
        hypercube.displace_by(Point.fill(0.01, 7))
    with pytest.raises(errors.DimensionMismatchError):
        hypercube.displace_to(Point.fill(0.01, 7))
    with pytest.raises(errors.DimensionMismatchError):
        hypercube.displace_to_clamped(Point.fill(0.01, 7))


def test_displace_by_after_shrink() -> None:
    hypercube = Hypercube(5, 30.4, 105.0)
    hypercube.shrink(0.90)
    hypercube.evaluate(corefuncs.sphere)
    center = hypercube.center
    hypercube.displace_by(Point.fill(0.01, 5))
    testing.assert_points_almost_equal(hypercube.center, center + Point.fill(0.01, 5))
    assert not hypercube.values
    _check_invariants(hypercube)


def test_displace_to_out_of_bounds() -> None:
    hypercube = Hypercube(5, 0.0, 105.0)
    with pytest.raises(errors.DisplacementOutOfBoundsError):
        hypercube.displace_to(Point.fill(52.6, 5))


def test_shrink_and_displace() -> None:
    hypercube = Hypercube(5, 0.0, 120.0)
    hypercube.shrink(59.0 / 60.0)
    hypercube.displace_by(Point.fill(1.0, 5))
    # displacing again should fail
    with pytest.raises(errors.DisplacementOutOfBoundsError):
        hypercube.displace_by(Point.fill(1.0, 5))


def test_displace_round_trip() -> None:
    hypercube = Hypercube(3, 0.0, 120.0)
    hypercube.shrink(0.5)
    bounds = hypercube.current_bounds
    vector = Point([10.0, -20.0, 30.0])
    hypercube.displace_by(vector)
    hypercube.displace_by(vector.scale(-1))
    assert hypercube.current_bounds == bounds


def test_shrink() -> None:
    hypercube = Hypercube(5, 0.0, 120.0)
    original = Hypercube(5, 0.0, 120.0)
    hypercube.evaluate(corefuncs.rastrigin)
    assert hypercube.values
    population = hypercube.population
    hypercube.shrink(0.5)
    assert hypercube.center == original.center
    assert hypercube.init_bounds == original.init_bounds
    assert hypercube.current_bounds == HypercubeBounds.new(5, 30.0, 90.0)
    assert hypercube.diagonal == Point.fill(60.0, 5)
    assert hypercube.population != population
    for before, after in zip(population, hypercube.population):
        testing.assert_points_almost_equal(after, before.shrink_towards_center(original.center, 0.5))
    assert not hypercube.values
    assert hypercube.peek_best_value() is None
    _check_invariants(hypercube)


def test_shrink_three_dimensions() -> None:
    hypercube = Hypercube(3, 0.0, 120.0)
    hypercube.evaluate(corefuncs.sphere)
    hypercube.shrink(0.5)
    assert hypercube.current_bounds == HypercubeBounds.new(3, 30.0, 90.0)
    assert not hypercube.values


@pytest.mark.parametrize("factor", [0.0, -0.1, 1.1])  # type: ignore
def test_shrink_bad_factor(factor: float) -> None:
    hypercube = Hypercube(3, 0.0, 120.0)
    with pytest.raises(errors.FactorOutOfRangeError):
        hypercube.shrink(factor)


def test_eight_corners() -> None:
    hypercube = Hypercube(3, 0.0, 120.0)
    # shrink to half its size
    hypercube.shrink(0.50)
    for x in (30.0, 90.0):
        for y in (30.0, 90.0):
            for z in (30.0, 90.0):
                hypercube.displace_to(Point([x, y, z]))
                assert hypercube.center == Point([x, y, z])
                _check_invariants(hypercube)


def test_eight_corners_too_large() -> None:
    hypercube = Hypercube(3, 0.0, 120.0)
    # shrink to slightly more than half its size
    hypercube.shrink(0.51)
    with pytest.raises(errors.DisplacementOutOfBoundsError):
        hypercube.displace_to(Point([30.0, 30.0, 30.0]))


@testing.parametrized(
    inside=([50.0, 70.0], [50.0, 70.0]),
    upper=([110.0, 60.0], [90.0, 60.0]),
    lower=([60.0, 5.0], [60.0, 30.0]),
    both=([-10.0, 200.0], [30.0, 90.0]),
)
def test_displace_to_clamped(destination: tp.List[float], expected_center: tp.List[float]) -> None:
    hypercube = Hypercube(2, 0.0, 120.0, population_size=10)
    hypercube.shrink(0.5)
    hypercube.evaluate(corefuncs.sphere)
    hypercube.displace_to_clamped(Point(destination))
    testing.assert_points_almost_equal(hypercube.center, expected_center)
    assert hypercube.diagonal == Point.fill(60.0, 2)
    assert not hypercube.values
    _check_invariants(hypercube)


@pytest.mark.parametrize("seed", range(5))  # type: ignore
def test_random_walk_keeps_invariants(seed: int) -> None:
    rng = np.random.RandomState(seed)
    hypercube = Hypercube(3, -10.0, 10.0, population_size=5, random_state=rng)
    for _ in range(30):
        hypercube.shrink(rng.uniform(0.8, 1.0))
        hypercube.displace_to_clamped(Point(rng.uniform(-15, 15, size=3)))
        _check_invariants(hypercube)
        hypercube.randomize_pop()
        _check_invariants(hypercube)


def test_repr() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        hypercube = Hypercube(1, 0.0, 1.0)
    assert repr(hypercube).startswith("Hypercube(dimension=1")
    assert "Diagonal length: 1.00" in str(hypercube)
