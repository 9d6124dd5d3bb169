import collections
import re
import time
from typing import Dict, List, Tuple

import numpy as np  # type: ignore


def reduce_string(expr: str) -> str:
    """Collapses whitespace runs and strips spaces just inside parentheses."""
    reduced = re.sub(r"\s+", " ", expr.strip())
    reduced = re.sub(r"\(\s+", "(", reduced)
    return re.sub(r"\s+\)", ")", reduced)


def parse_action(action: str) -> Tuple[str, int]:
    """Splits an action instance string into its expression and start time.

    Args:
        action: Action string, e.g. `(move robot1 room1 room2):5`.

    Returns:
        (`move robot1 room1 room2`, 5). The time is -1 when absent.
    """
    expr = reduce_string(action)
    timestep = -1
    delim = expr.find(":")
    if delim != -1:
        try:
            timestep = int(expr[delim + 1 :])
        except ValueError:
            raise ValueError(f"Invalid time in action string: {action}") from None
        expr = expr[:delim].rstrip()

    if not expr.startswith("(") or not expr.endswith(")"):
        raise ValueError(f"Action string must be parenthesized: {action}")
    return expr[1:-1].strip(), timestep


def get_action_expression(action: str) -> str:
    return parse_action(action)[0]


def get_action_time(action: str) -> int:
    return parse_action(action)[1]


def get_action_name(action: str) -> str:
    return get_action_expression(action).split(" ")[0]


def get_action_params(action: str) -> List[str]:
    return get_action_expression(action).split(" ")[1:]


class Timer:
    """Timer to keep track of timing intervals for different keys."""

    def __init__(self):
        self._tics: Dict[str, float] = {}

    def tic(self, key: str) -> float:
        """Starts timing for the given key.

        Args:
            key: Time interval key.

        Returns:
            Current time.
        """
        self._tics[key] = time.time()
        return self._tics[key]

    def toc(self, key: str, set_tic: bool = False) -> float:
        """Returns the time elapsed since the last tic for the given key.

        Args:
            key: Time interval key.
            set_tic: Reset the tic to the current time.

        Returns:
            Time elapsed since the last tic.
        """
        toc = time.time()
        tic = self._tics[key]
        if set_tic:
            self._tics[key] = toc
        return toc - tic


class Profiler(Timer):
    """Profiler to keep track of average time interval for different keys."""

    class ProfilerContext:
        """Context manager for timing code inside a `with` block."""

        def __init__(self, profiler: "Profiler", key: str):
            self.profiler = profiler
            self.key = key

        def __enter__(self) -> float:
            self.tic = time.time()
            return self.tic

        def __exit__(self, type, value, traceback) -> None:
            if self.profiler._disabled:
                return
            tictoc = time.time() - self.tic
            self.profiler._tictocs[self.key].append(tictoc)

    def __init__(self, disabled: bool = False):
        """Initializes the profiler with the given status.

        Args:
            disabled: Disable the profiler.
        """
        super().__init__()
        self._disabled = disabled
        self._tictocs: Dict[str, List[float]] = collections.defaultdict(list)

    def disable(self) -> None:
        """Disables the profiler so that tic, toc and profile record nothing."""
        self._disabled = True

    def enable(self) -> None:
        """Enables the profiler."""
        self._disabled = False

    def tic(self, key: str) -> float:
        if self._disabled:
            return 0.0
        return super().tic(key)

    def toc(self, key: str, set_tic: bool = False) -> float:
        if self._disabled:
            return 0.0
        tictoc = super().toc(key, set_tic)
        self._tictocs[key].append(tictoc)
        return tictoc

    def profile(self, key: str) -> ProfilerContext:
        """Times the code inside a `with` block for the given key.

        Args:
            key: Time interval key.

        Returns:
            Profiler context.
        """
        return Profiler.ProfilerContext(self, key)

    def count(self, key: str) -> int:
        return len(self._tictocs.get(key, ()))

    def counts(self) -> Dict[str, int]:
        return {key: len(tictoc) for key, tictoc in self._tictocs.items()}

    def compute_average(self, key: str, reset: bool = False) -> float:
        """Computes the average time interval for the given key.

        Args:
            key: Time interval key.
            reset: Reset the collected time intervals.

        Returns:
            Average time interval, or 0 if nothing was recorded.
        """
        if not self._tictocs.get(key):
            return 0.0
        mean = float(np.mean(self._tictocs[key]))
        if reset:
            self._tictocs[key] = []
        return mean

    def compute_sum(self, key: str, reset: bool = False) -> float:
        """Computes the sum of all time intervals for the given key.

        Args:
            key: Time interval key.
            reset: Reset the collected time intervals.

        Returns:
            Sum of time intervals
        """
        res = float(np.sum(self._tictocs.get(key, [])))
        if reset:
            self._tictocs[key] = []
        return res

    def print(self) -> None:
        t_total = 0.0
        for key in self._tictocs:
            t_key = self.compute_sum(key)
            print(f"  {key} [{self.count(key)} calls]: {t_key}s")
            t_total += t_key
        print(f"  total: {t_total}s")
