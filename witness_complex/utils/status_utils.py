import sys
import time


def _in_notebook() -> bool:
    try:
        from IPython import get_ipython  # type: ignore
    except Exception:
        return False
    shell = get_ipython()
    return shell is not None and type(shell).__name__ == "ZMQInteractiveShell"


def _status(msg: str):
    if _in_notebook():
        from IPython.display import clear_output
        clear_output(wait=True)
        print(msg)
    else:
        # real terminals: overwrite the current line
        print("\r" + msg.ljust(80), end="", flush=True, file=sys.stderr)


def _status_clear():
    if _in_notebook():
        from IPython.display import clear_output
        clear_output(wait=True)
    else:
        print("\r" + (" " * 80), end="\r", flush=True, file=sys.stderr)


class _Progress:
    """Throttled "label i/n" status lines for long loops."""

    def __init__(self, label: str, total: int, *, enabled: bool = True, min_interval: float = 0.2):
        self.label = label
        self.total = int(total)
        self.enabled = bool(enabled)
        self.min_interval = float(min_interval)
        self._t0 = time.perf_counter()
        self._last = -float("inf")

    def update(self, done: int) -> None:
        if not self.enabled:
            return
        now = time.perf_counter()
        if done < self.total and now - self._last < self.min_interval:
            return
        self._last = now
        _status(f"{self.label} {done}/{self.total} ({now - self._t0:.1f} s)")

    def close(self) -> float:
        elapsed = time.perf_counter() - self._t0
        if self.enabled:
            _status_clear()
        return elapsed
