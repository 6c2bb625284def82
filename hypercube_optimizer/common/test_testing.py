# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import numpy as np
from . import testing


def test_printed_assert_equal() -> None:
    testing.printed_assert_equal(0, 0)
    np.testing.assert_raises(AssertionError, testing.printed_assert_equal, 0, 1)


@testing.parametrized(
    equal=([1.0, 2.0], [1.0, 2.0], False),
    close=([1.0, 2.0], [1.0, 2.0 + 1e-9], False),
    different=([1.0, 2.0], [1.0, 2.1], True),
)
def test_assert_points_almost_equal(actual: tp.List[float], desired: tp.List[float], error: bool) -> None:
    if error:
        np.testing.assert_raises(AssertionError, testing.assert_points_almost_equal, actual, desired)
    else:
        testing.assert_points_almost_equal(actual, desired)


@testing.parametrized(
    single=(3,),
    other=(4,),
)
def test_parametrized_single_argument(value: int) -> None:
    assert value in (3, 4)
