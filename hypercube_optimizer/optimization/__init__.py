# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .evaluation import PointEval
from .hypercube import Hypercube
from .optimizer import HypercubeOptimizer
from .optimizer import ConfiguredHypercubeOptimizer
from .result import ExitStatus
from .result import OptimizationResult
from . import callbacks
