"""Thread-based bounded queue feeding the single renderer worker.

Purpose
-------
Decouple producer threads from the write latency of the output stream while
keeping strict submission order.

Contents
--------
* :class:`QueueAdapter` - background worker implementation of :class:`QueuePort`.

System Role
-----------
Owned by :class:`~lib_log_console.adapters.console.ConsoleHandler`; every
entry passes through exactly one worker thread, so formatting and writing
need no locking.

Alignment Notes
---------------
Start-on-demand, drain-on-shutdown semantics. Full queues block by default;
the opt-in ``"drop"`` policy always reports rejected entries.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from lib_log_console.application.ports.queue import QueuePort
from lib_log_console.domain.events import LogEntry


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class _Envelope:
    entry: LogEntry
    done: threading.Event | None = None

    def release(self) -> None:
        if self.done is not None:
            self.done.set()


class QueueAdapter(QueuePort):
    """Process log entries on a background thread in submission order.

    Examples
    --------
    >>> processed = []
    >>> adapter = QueueAdapter(worker=lambda entry: processed.append(entry.message))
    >>> adapter.start()
    >>> from datetime import datetime, timezone
    >>> from lib_log_console.domain.levels import LogLevel
    >>> entry = LogEntry(LogLevel.INFO, 'msg', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc))
    >>> adapter.put(entry, wait=True)
    True
    >>> adapter.stop(drain=True)
    >>> processed
    ['msg']
    """

    def __init__(
        self,
        *,
        worker: Callable[[LogEntry], None] | None = None,
        maxsize: int = 3,
        drop_policy: str = "block",
        on_drop: Callable[[LogEntry], None] | None = None,
        timeout: float | None = None,
        stop_timeout: float | None = 5.0,
        diagnostic: Callable[[str, dict[str, Any]], None] | None = None,
    ) -> None:
        """Create the queue with an optional initial worker and capacity.

        Parameters
        ----------
        worker:
            Callable invoked for each entry; ``None`` leaves entries unprocessed
            (they are still counted and released).
        maxsize:
            Maximum number of queued entries before backpressure applies.
        drop_policy:
            Either ``"block"`` (producers wait) or ``"drop"`` (new entries are
            rejected and reported when the queue is full).
        on_drop:
            Optional callback invoked for every rejected entry.
        timeout:
            Producer wait limit (seconds) under the blocking policy. ``None``
            waits until space frees up.
        stop_timeout:
            Default drain deadline (seconds) applied when :meth:`stop` is called
            without an explicit ``timeout``. ``None`` disables the deadline.
        diagnostic:
            Optional ``(name, payload)`` hook receiving drops and worker errors.
        """
        if maxsize < 1:
            raise ValueError("maxsize must be a positive integer")
        policy = drop_policy.lower()
        if policy not in {"block", "drop"}:
            raise ValueError("drop_policy must be 'block' or 'drop'")
        self._worker = worker
        self._maxsize = maxsize
        self._queue: queue.Queue[_Envelope | None] = queue.Queue(maxsize=maxsize)
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._drop_pending = False
        self._idle = threading.Condition()
        self._pending = 0
        self._drop_policy = policy
        self._on_drop = on_drop
        self._timeout = timeout
        self._stop_timeout = stop_timeout
        self._diagnostic = diagnostic
        self._worker_failed = False

    @property
    def maxsize(self) -> int:
        return self._maxsize

    @property
    def running(self) -> bool:
        """Return ``True`` while the worker thread is alive and not stopping."""

        thread = self._thread
        return thread is not None and thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> None:
        """Start the background worker thread if it is not already running."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._drop_pending = False
        self._worker_failed = False
        self._thread = threading.Thread(target=self._run, name="lib_log_console-renderer", daemon=True)
        self._thread.start()

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        """Stop the worker thread, optionally draining queued entries.

        Parameters
        ----------
        drain:
            When ``True`` wait for queued entries to be written before
            returning. When ``False`` pending entries are reported as dropped.
        timeout:
            Per-call override for the drain deadline. ``None`` falls back to
            the ``stop_timeout`` given at construction.
        """
        thread = self._thread
        if thread is None:
            return

        effective_timeout = timeout if timeout is not None else self._stop_timeout
        deadline = time.monotonic() + effective_timeout if effective_timeout is not None else None

        def remaining_time() -> float | None:
            if deadline is None:
                return None
            return max(0.0, deadline - time.monotonic())

        self._drop_pending = not drain
        if not drain:
            self._drain_pending_items()
        self._stop_event.set()
        self._enqueue_stop_signal(deadline)

        drain_completed = True
        if drain:
            drain_completed = self.wait_until_idle(remaining_time())
            if not drain_completed:
                self._drop_pending = True
                self._drain_pending_items()

        thread.join(remaining_time())

        if thread.is_alive():
            self._emit_diagnostic(
                "queue_shutdown_timeout",
                {"timeout": effective_timeout, "drain_completed": drain_completed},
            )
            raise RuntimeError("Queue worker failed to stop within the allotted timeout")

        self._thread = None
        self._stop_event.clear()
        self._drop_pending = False

    def put(self, entry: LogEntry, *, wait: bool = False) -> bool:
        """Enqueue ``entry`` for asynchronous processing.

        Returns ``True`` when the entry was accepted, ``False`` when the queue
        was full and the drop policy (or the producer timeout) rejected it.
        With ``wait`` the call returns only after the worker finished the
        entry.
        """
        envelope = _Envelope(entry, threading.Event() if wait else None)
        self._mark_pending()
        try:
            if self._drop_policy == "drop":
                self._queue.put(envelope, block=False)
            elif self._timeout is not None:
                self._queue.put(envelope, timeout=self._timeout)
            else:
                self._queue.put(envelope)
        except queue.Full:
            self._mark_done()
            self._handle_drop(envelope)
            return False

        if envelope.done is not None:
            envelope.done.wait()
        return True

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until all queued entries are processed or ``timeout`` elapses.

        Returns ``True`` when the queue drains fully; ``False`` when the wait
        timed out (entries might still be pending).
        """

        with self._idle:
            return self._idle.wait_for(lambda: self._pending == 0, timeout)

    @property
    def worker_failed(self) -> bool:
        """Return ``True`` once the worker observed an exception since start."""

        return self._worker_failed

    def _run(self) -> None:
        """Internal worker loop draining the queue until stopped."""
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    if self._stop_event.is_set():
                        break
                    continue
                if self._drop_pending:
                    self._handle_drop(item)
                    continue
                if self._worker is not None:
                    try:
                        self._worker(item.entry)
                    except Exception as exc:  # noqa: BLE001
                        self._worker_failed = True
                        self._report_worker_exception(item.entry, exc)
            finally:
                self._queue.task_done()
                if item is not None:
                    item.release()
                    self._mark_done()

    def _mark_pending(self) -> None:
        with self._idle:
            self._pending += 1

    def _mark_done(self) -> None:
        with self._idle:
            self._pending -= 1
            if self._pending == 0:
                self._idle.notify_all()

    def _handle_drop(self, envelope: _Envelope) -> None:
        """Report a rejected entry and release any waiting producer."""
        envelope.release()
        entry = envelope.entry
        self._emit_diagnostic("queue_dropped", {"level": entry.level.name, "message": entry.message})
        if self._on_drop is None:
            LOGGER.warning("Console queue dropped a %s entry", entry.level.name)
            return
        try:
            self._on_drop(entry)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Queue drop handler raised an exception; continuing", exc_info=exc)
            self._emit_diagnostic(
                "queue_drop_callback_error",
                {"level": entry.level.name, "exception": repr(exc)},
            )

    def _report_worker_exception(self, entry: LogEntry, exc: Exception) -> None:
        """Log and surface worker failures without tearing down the thread."""

        LOGGER.error("Console renderer raised an exception; continuing", exc_info=exc)
        self._emit_diagnostic(
            "queue_worker_error",
            {"level": entry.level.name, "message": entry.message, "exception": repr(exc)},
        )

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Queue diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)

    def _drain_pending_items(self) -> None:
        """Remove and report entries still queued after a non-draining stop."""

        while True:
            try:
                dropped = self._queue.get_nowait()
            except queue.Empty:
                break
            else:
                self._queue.task_done()
                if dropped is not None:
                    self._handle_drop(dropped)
                    self._mark_done()

    def _enqueue_stop_signal(self, deadline: float | None) -> None:
        """Ensure the worker thread wakes up to observe the stop event."""

        while True:
            try:
                if deadline is None:
                    self._queue.put(None)
                else:
                    self._queue.put(None, timeout=max(0.0, deadline - time.monotonic()))
                break
            except queue.Full:
                try:
                    dropped = self._queue.get_nowait()
                except queue.Empty:
                    continue
                else:
                    self._queue.task_done()
                    if dropped is not None:
                        self._handle_drop(dropped)
                        self._mark_done()


__all__ = ["QueueAdapter"]
