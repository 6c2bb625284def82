# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import sys
import numpy as np
import hypercube_optimizer as hco
from hypercube_optimizer.common import testing
from . import __main__ as cli


@testing.parametrized(
    sequential=(1,),
    threaded=(3,),
)
def test_launch(num_workers: int) -> None:
    result = cli.launch(
        "sphere", dimension=2, init_value=3.0, lower=-5.0, upper=5.0, max_loop=20, num_workers=num_workers, seed=12
    )
    assert isinstance(result, hco.OptimizationResult)
    assert result.best_value is not None
    assert 0 <= result.best_value <= 18.0
    assert result.iterations <= 20


def test_main(monkeypatch, capsys) -> None:  # type: ignore
    argv = ["hypercube_optimizer", "rastrigin", "--dimension", "3", "--max_loop", "5", "--seed", "1"]
    monkeypatch.setattr(sys, "argv", argv)
    cli.main()
    out = capsys.readouterr().out
    assert out.startswith("ITERATION_LIMIT_REACHED") or out.startswith("CONVERGED")
    assert "Best value:" in out


def test_public_namespace() -> None:
    optimizer = hco.HypercubeOptimizer([60.0] * 4, 0.0, 120.0, max_loop=50, random_state=np.random.RandomState(0))
    result = optimizer.minimize(hco.functions.registry["rastrigin"])
    assert result.best_value is not None
    assert result.best_value <= hco.functions.registry["rastrigin"](np.full(4, 60.0))
    assert hco.__version__
