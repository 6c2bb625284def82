# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Classical test functions. They are written as losses (to be minimized),
use :code:`Negated` for turning them into objectives to maximize.
"""

from math import exp, sqrt
import numpy as np
import hypercube_optimizer.common.typing as tp
from hypercube_optimizer.common.decorators import Registry


registry: Registry[tp.Callable[[np.ndarray], float]] = Registry()


class Negated:
    """Wraps a function so that it returns the opposite of its value.
    This converts a loss into an objective function for maximization (and back).
    """

    def __init__(self, func: tp.Callable[[np.ndarray], float]) -> None:
        self.func = func

    def __call__(self, x: np.ndarray) -> float:
        return -float(self.func(x))

    def __repr__(self) -> str:
        return f"Negated({getattr(self.func, '__name__', self.func)})"


@registry.register
def sphere(x: np.ndarray) -> float:
    """The most classical continuous optimization testbed.

    If you do not solve that one then you have a bug."""
    x = np.asarray(x)
    assert x.ndim == 1
    return float(x.dot(x))


@registry.register
def summation(x: np.ndarray) -> float:
    """Sum of the coordinates, unbounded in both directions."""
    return float(np.sum(x))


@registry.register
def rastrigin(x: np.ndarray) -> float:
    """Classical multimodal function."""
    x = np.asarray(x)
    cosi = float(np.sum(np.cos(2 * np.pi * x)))
    return float(10 * (len(x) - cosi) + sphere(x))


@registry.register
def rosenbrock(x: np.ndarray) -> float:
    x = np.asarray(x)
    x_m_1 = x[:-1] - 1
    x_diff = x[:-1] ** 2 - x[1:]
    return float(100 * x_diff.dot(x_diff) + x_m_1.dot(x_m_1))


@registry.register
def ackley(x: np.ndarray) -> float:
    x = np.asarray(x)
    dim = x.size
    sum_cos = np.sum(np.cos(2 * np.pi * x))
    return -20.0 * exp(-0.2 * sqrt(sphere(x) / dim)) - exp(sum_cos / dim) + 20 + exp(1)
