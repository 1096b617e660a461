"""A thin handle around a worker thread with cooperative cancellation."""

from __future__ import annotations

import random
import threading
from collections.abc import Callable, Iterable
from typing import Any


class Thread:
    """Runs ``fn(*args)`` on a background thread.

    Python threads cannot be killed, so :meth:`exit` only asks the worker to
    stop; a long-running ``fn`` should poll :meth:`cancelled`.
    """

    def __init__(self, fn: Callable[..., Any], args: Iterable[Any] = ()) -> None:
        self.id: int = random.randint(1_000_000, 2_000_000)
        self.fn = fn
        self.args: tuple[Any, ...] = tuple(args or ())
        self.running = False
        self.result: Any = None
        self._error: BaseException | None = None
        self._cancel = threading.Event()
        self._worker: threading.Thread | None = None

    def __repr__(self) -> str:
        return f"Thread(id={self.id}, running={self.running})"

    def _run(self) -> None:
        try:
            self.result = self.fn(*self.args)
        except BaseException as exc:  # handed back to the caller of wait()
            self._error = exc

    def execute(self) -> bool:
        """Start the worker; return False if it is already running."""
        if self.running:
            return False
        self.running = True
        self._cancel.clear()
        self._error = None
        self._worker = threading.Thread(target=self._run, name=f"worker-{self.id}", daemon=True)
        self._worker.start()
        return True

    def wait(self) -> Any:
        """Block until the worker finishes and return what ``fn`` returned.

        An exception raised by ``fn`` is raised again here.
        """
        if self.running and self._worker is not None:
            self.running = False
            self._worker.join()
        if self._error is not None:
            error, self._error = self._error, None
            raise error
        return self.result

    def exit(self) -> bool:
        """Ask a running worker to stop; return False if it was not running."""
        if not self.running:
            return False
        self.running = False
        self._cancel.set()
        return True

    def cancelled(self) -> bool:
        """True once :meth:`exit` has asked the worker to stop."""
        return self._cancel.is_set()