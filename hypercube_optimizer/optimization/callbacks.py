# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import json
import time
import datetime
import logging
import warnings
from pathlib import Path
import hypercube_optimizer.common.typing as tp
from .optimizer import HypercubeOptimizer
from .result import IterationRecord

global_logger = logging.getLogger(__name__)


class OptimizationPrinter:
    """Printer to register as "iteration" callback in an optimizer, for printing
    best point regularly.

    Parameters
    ----------
    print_interval_iterations: int
        max number of iterations before performing another print
    print_interval_seconds: float
        max number of seconds before performing another print
    """

    def __init__(self, print_interval_iterations: int = 1, print_interval_seconds: float = 60.0) -> None:
        assert print_interval_iterations > 0
        assert print_interval_seconds > 0
        self._print_interval_iterations = int(print_interval_iterations)
        self._print_interval_seconds = print_interval_seconds
        self._next_iteration = self._print_interval_iterations
        self._next_time = time.time() + print_interval_seconds

    def __call__(self, optimizer: HypercubeOptimizer, record: IterationRecord) -> None:
        if time.time() >= self._next_time or optimizer.num_iterations >= self._next_iteration:
            self._next_time = time.time() + self._print_interval_seconds
            self._next_iteration = optimizer.num_iterations + self._print_interval_iterations
            print(f"After {optimizer.num_iterations} iterations, best is {record.best}")


class OptimizationLogger:
    """Logger to register as "iteration" callback in an optimizer, for logging
    best point regularly.

    Parameters
    ----------
    logger:
        given logger that callback will use to log
    log_level:
        log level that logger will write to
    log_interval_iterations: int
        max number of iterations before performing another log
    log_interval_seconds:
        max number of seconds before performing another log
    """

    def __init__(
        self,
        *,
        logger: logging.Logger = global_logger,
        log_level: int = logging.INFO,
        log_interval_iterations: int = 1,
        log_interval_seconds: float = 60.0,
    ) -> None:
        assert log_interval_iterations > 0
        assert log_interval_seconds > 0
        self._logger = logger
        self._log_level = log_level
        self._log_interval_iterations = int(log_interval_iterations)
        self._log_interval_seconds = log_interval_seconds
        self._next_iteration = self._log_interval_iterations
        self._next_time = time.time() + log_interval_seconds

    def __call__(self, optimizer: HypercubeOptimizer, record: IterationRecord) -> None:
        if time.time() >= self._next_time or optimizer.num_iterations >= self._next_iteration:
            self._next_time = time.time() + self._log_interval_seconds
            self._next_iteration = optimizer.num_iterations + self._log_interval_iterations
            self._logger.log(
                self._log_level,
                "After %s iterations (%s evaluations), best is %s",
                optimizer.num_iterations,
                optimizer.num_evals,
                record.best,
            )


class IterationsLogger:
    """Logs iteration information into a file (one json dict per line) during optimization.

    Parameters
    ----------
    filepath: str or pathlib.Path
        the path to dump data to
    append: bool
        whether to append the file (otherwise it replaces it)

    Example
    -------

    .. code-block:: python

        logger = IterationsLogger(filepath)
        optimizer.register_callback("iteration",  logger)
        optimizer.maximize(func)
        list_of_dict_of_data = logger.load()
    """

    def __init__(self, filepath: tp.PathLike, append: bool = True) -> None:
        self._session = datetime.datetime.now().strftime("%y-%m-%d %H:%M:%S")
        self._filepath = Path(filepath)
        if self._filepath.exists() and not append:
            self._filepath.unlink()
        self._filepath.parent.mkdir(exist_ok=True, parents=True)

    def __call__(self, optimizer: HypercubeOptimizer, record: IterationRecord) -> None:
        data = {
            "#optimizer": optimizer.name,
            "#session": self._session,
            "#iteration": record.iteration,
            "#num-evals": optimizer.num_evals,
            "#skipped": record.skipped,
            "#final": record.final,
            "#factor": record.factor,
            "#current-value": record.current.value,
            "#best-value": record.best.value,
            "best": record.best.point.to_array().tolist(),
            "center": optimizer.hypercube.center.to_array().tolist(),
            "diagonal-length": optimizer.hypercube.diagonal_length,
        }
        try:  # avoid bugging as much as possible
            with self._filepath.open("a") as f:
                f.write(json.dumps(data) + "\n")
        except Exception as e:  # pylint: disable=broad-except
            warnings.warn(f"Failing to json data: {e}")

    def load(self) -> tp.List[tp.Dict[str, tp.Any]]:
        """Loads data from the log file"""
        data: tp.List[tp.Dict[str, tp.Any]] = []
        if self._filepath.exists():
            with self._filepath.open("r") as f:
                for line in f.readlines():
                    data.append(json.loads(line))
        return data
