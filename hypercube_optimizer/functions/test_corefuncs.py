# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pickle
import numpy as np
from hypercube_optimizer.common import testing
from . import corefuncs


@testing.parametrized(
    sphere=("sphere", 0.0),
    summation=("summation", 0.0),
    rastrigin=("rastrigin", 0.0),
    rosenbrock=("rosenbrock", 3.0),
    ackley=("ackley", 0.0),
)
def test_value_at_origin(name: str, expected: float) -> None:
    func = corefuncs.registry[name]
    np.testing.assert_almost_equal(func(np.zeros(4)), expected)


def test_known_values() -> None:
    np.testing.assert_almost_equal(corefuncs.sphere(np.array([1.0, 2.0])), 5.0)
    np.testing.assert_almost_equal(corefuncs.summation(np.ones(3)), 3.0)
    # cosines are all 1 on integer points
    np.testing.assert_almost_equal(corefuncs.rastrigin(np.ones(3)), 3.0)
    np.testing.assert_almost_equal(corefuncs.rosenbrock(np.ones(5)), 0.0)


def test_negated() -> None:
    func = corefuncs.Negated(corefuncs.sphere)
    np.testing.assert_almost_equal(func(np.array([1.0, 2.0])), -5.0)
    assert repr(func) == "Negated(sphere)"
    pickle.dumps(func)  # should be picklable, for process executors
