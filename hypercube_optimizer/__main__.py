# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import argparse
import logging
from concurrent import futures
import numpy as np
import hypercube_optimizer.common.typing as tp
from hypercube_optimizer.geometry import Point
from hypercube_optimizer.functions import corefuncs
from hypercube_optimizer.optimization import HypercubeOptimizer
from hypercube_optimizer.optimization import OptimizationResult
from hypercube_optimizer.optimization import callbacks


# pylint: disable=too-many-arguments
def launch(
    function: str,
    dimension: int = 8,
    init_value: float = 60.0,
    lower: float = 0.0,
    upper: float = 120.0,
    tol_f: float = 0.01,
    max_loop: int = 1000,
    max_eval: tp.Optional[int] = 4000,
    max_timeout: tp.Optional[float] = 120.0,
    num_workers: int = 1,
    seed: tp.Optional[int] = None,
) -> OptimizationResult:
    """Minimizes a registered test function, starting from a point with all coordinates equal to init_value
    """
    optimizer = HypercubeOptimizer(
        Point.fill(init_value, dimension),
        lower,
        upper,
        tol_x=tol_f,
        tol_f=tol_f,
        max_loop=max_loop,
        max_eval=max_eval,
        max_timeout=max_timeout,
        random_state=np.random.RandomState(seed),
    )
    optimizer.register_callback("iteration", callbacks.OptimizationLogger(log_interval_iterations=50))
    func = corefuncs.registry[function]
    if num_workers == 1:
        return optimizer.minimize(func)
    with futures.ThreadPoolExecutor(max_workers=num_workers) as executor:
        return optimizer.minimize(func, executor=executor)


def get_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Minimize a test function with the hypercube optimizer.")
    parser.add_argument(
        "function", type=str, nargs="?", default="rastrigin", choices=sorted(corefuncs.registry),
        help="name of a function registered in the test functions registry",
    )
    parser.add_argument("--dimension", type=int, default=8, help="Dimension of the search space")
    parser.add_argument("--init_value", type=float, default=60.0, help="Value of all coordinates of the initial point")
    parser.add_argument("--lower", type=float, default=0.0, help="Lower bound on all axes")
    parser.add_argument("--upper", type=float, default=120.0, help="Upper bound on all axes")
    parser.add_argument("--tol_f", type=float, default=0.01, help="Tolerance on the value for convergence")
    parser.add_argument("--max_loop", type=int, default=1000, help="Maximum number of iterations")
    parser.add_argument("--max_eval", type=int, default=4000, help="Maximum number of function evaluations")
    parser.add_argument("--max_timeout", type=float, default=120.0, help="Maximum duration in seconds")
    parser.add_argument(
        "--num_workers", type=int, default=1, help="Number of threads used for evaluating the population"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Use a seed for reproducibility",
    )
    parser.add_argument("--verbose", action="store_true", help="Log progress information")
    return parser.parse_args()


def main() -> None:
    args = get_args()
    kwargs = vars(args)
    logging.basicConfig(level=logging.INFO if kwargs.pop("verbose") else logging.WARNING)
    result = launch(**kwargs)
    print(f"{result.status.name}: {result.message}")
    print(f"Iterations: {result.iterations}, function evaluations: {result.function_evals}")
    print(f"Best value: {result.best_value}")
    print(f"Best point: {result.best_point}")


if __name__ == "__main__":
    main()
