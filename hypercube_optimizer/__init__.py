# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .common import typing as typing
from .common import errors as errors
from .geometry import Point as Point
from .geometry import HypercubeBounds as HypercubeBounds
from .geometry import Containment as Containment
from .optimization import PointEval as PointEval
from .optimization import Hypercube as Hypercube
from .optimization import HypercubeOptimizer as HypercubeOptimizer
from .optimization import ConfiguredHypercubeOptimizer as ConfiguredHypercubeOptimizer
from .optimization import ExitStatus as ExitStatus
from .optimization import OptimizationResult as OptimizationResult
from .optimization import callbacks as callbacks
from . import functions as functions


__all__ = [
    "Point",
    "HypercubeBounds",
    "Containment",
    "PointEval",
    "Hypercube",
    "HypercubeOptimizer",
    "ConfiguredHypercubeOptimizer",
    "ExitStatus",
    "OptimizationResult",
    "callbacks",
    "functions",
    "errors",
    "typing",
]


__version__ = "0.1.0"
