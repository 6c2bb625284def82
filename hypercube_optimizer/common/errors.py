# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.


# base classes


class HypercubeError(Exception):
    """Base class for error raised by hypercube_optimizer"""


class HypercubeWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class HypercubeRuntimeError(RuntimeError, HypercubeError):
    """Runtime error raised by hypercube_optimizer"""


class HypercubeValueError(ValueError, HypercubeError):
    """Value error raised by hypercube_optimizer"""


# contract violations: these are programming errors and are never caught internally


class DimensionMismatchError(HypercubeValueError):
    """Operands of an elementwise operation do not share the same dimension"""


class EmptyPointError(HypercubeValueError):
    """A point cannot be created without any coordinate"""


class InvalidBoundsError(HypercubeValueError):
    """Upper bound is not strictly larger than lower bound"""


class FactorOutOfRangeError(HypercubeValueError):
    """Shrink factor is outside of its allowed interval"""


class NaNImageError(HypercubeValueError):
    """Objective function returned NaN"""


# expected runtime outcomes


class DisplacementOutOfBoundsError(HypercubeRuntimeError):
    """Displacement would move the hypercube outside of its initial bounds.
    The hypercube is left untouched when this is raised.
    """


# warnings


class HypercubeRuntimeWarning(RuntimeWarning, HypercubeWarning):
    """Runtime warning raised by hypercube_optimizer"""


class InefficientSettingsWarning(HypercubeRuntimeWarning):
    """Optimization settings are not optimal for the optimizer"""
