################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Scheduler for lookups that wait on data not yet ingested
"""

from __future__ import annotations

import logging
import math
import queue
import threading
import time
from concurrent.futures import Future
from concurrent.futures import InvalidStateError
from typing import Callable
from typing import Iterable
from typing import Optional

from oasis_transform.errors.transformer_errors import ExtrapolationError
from oasis_transform.errors.transformer_errors import RequestCancelledError
from oasis_transform.errors.transformer_errors import RequestTimeoutError
from oasis_transform.errors.transformer_errors import TransformerError
from oasis_transform.requests.pending_request import PendingRequest
from oasis_transform.resolver.transform_resolver import TransformResolver
from oasis_transform.timing.time_base import TimeBaseError
from oasis_transform.timing.time_base import validate_stamp
from oasis_transform.transform_types.transform import Transform


_LOG: logging.Logger = logging.getLogger(__name__)

# Queue items understood by the worker thread
_WAKE: object = object()
_STOP: object = object()


class RequestScheduler:
    """
    Completes asynchronous lookups as their data arrives

    Ingestion calls notify(), which only enqueues a wake. A worker thread
    re-attempts the pending lookups and fails them at their deadline. Each
    future is completed exactly once: a request is removed from the pending
    set under the lock before its future is touched.
    """

    def __init__(
        self,
        resolver: TransformResolver,
        *,
        default_timeout_sec: float,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        # Construction parameters
        self._resolver: TransformResolver = resolver
        self._default_timeout_sec: float = default_timeout_sec
        self._log: logging.Logger = logger or _LOG
        self._clock: Callable[[], float] = clock

        # Request state
        self._lock: threading.Lock = threading.Lock()
        self._pending: dict[int, PendingRequest] = {}
        self._next_id: int = 1
        self._shutdown: bool = False

        # Threading parameters
        self._wake_queue: queue.Queue[object] = queue.Queue()
        self._thread: threading.Thread = threading.Thread(
            target=self._run, name="transform_request_scheduler", daemon=True
        )

    def start(self) -> None:
        self._thread.start()

    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def request(
        self,
        target_frame: str,
        source_frame: str,
        t_ns: int,
        timeout_sec: Optional[float] = None,
    ) -> Future[Transform]:
        """
        Return a future for the transform from source_frame into target_frame

        Never raises; every failure is reported through the future. A
        timeout_sec that is negative or not finite fails the future at once.
        """
        future: Future[Transform] = Future()

        try:
            validate_stamp(t_ns)
        except TimeBaseError as exc:
            future.set_exception(TransformerError(str(exc)))
            return future

        try:
            timeout: float = self._resolve_timeout(timeout_sec)
        except TransformerError as exc:
            future.set_exception(exc)
            return future

        with self._lock:
            shutdown: bool = self._shutdown
        if shutdown:
            future.set_exception(
                RequestCancelledError("Transformer was shut down before the request")
            )
            return future

        try:
            future.set_result(self._resolver.resolve(target_frame, source_frame, t_ns))
            return future
        except ExtrapolationError as exc:
            if exc.expired:
                future.set_exception(exc)
                return future
        except TransformerError:
            pass
        except Exception as exc:
            future.set_exception(exc)
            return future

        now_s: float = self._clock()

        with self._lock:
            if self._shutdown:
                future.set_exception(
                    RequestCancelledError(
                        "Transformer was shut down before the request"
                    )
                )
                return future
            request: PendingRequest = PendingRequest(
                request_id=self._next_id,
                target_frame=target_frame,
                source_frame=source_frame,
                t_ns=t_ns,
                created_s=now_s,
                deadline_s=now_s + timeout,
                future=future,
            )
            self._next_id += 1
            self._pending[request.request_id] = request

        self._log.debug(f"Registered pending {request.describe()}")

        # A sample may have landed between the first attempt and registration
        self._wake_queue.put(_WAKE)

        return future

    def notify(self, frames: Iterable[str] = ()) -> None:
        """
        Signal that samples were ingested

        Only enqueues a wake, so the ingesting thread is never held up by
        re-resolution.
        """
        self._wake_queue.put(_WAKE)

    def shutdown(self) -> None:
        """
        Stop the worker and complete every outstanding request as cancelled

        Idempotent and callable from any thread.
        """
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True

        self._wake_queue.put(_STOP)
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()

        with self._lock:
            outstanding: list[PendingRequest] = list(self._pending.values())
            self._pending.clear()

        for request in outstanding:
            _complete(
                request.future,
                error=RequestCancelledError(
                    f"Transformer shut down before {request.describe()} resolved"
                ),
            )

        self._log.info(
            f"Request scheduler stopped, cancelled {len(outstanding)} pending requests"
        )

    def _resolve_timeout(self, timeout_sec: Optional[float]) -> float:
        """Return the deadline length for a request, raising if it is invalid."""
        if timeout_sec is None:
            return self._default_timeout_sec
        try:
            timeout: float = float(timeout_sec)
        except (TypeError, ValueError):
            raise TransformerError(
                f"Request timeout must be a number, got {timeout_sec!r}"
            ) from None
        if not math.isfinite(timeout) or timeout < 0.0:
            raise TransformerError(
                f"Request timeout must be finite and non-negative, got {timeout}"
            )
        return timeout

    def _run(self) -> None:
        while True:
            try:
                if self._serve_once():
                    return
            except Exception as exc:
                self._log.error(f"Request scheduler pass failed: {exc}")

    def _serve_once(self) -> bool:
        """Wait for a wake or the next deadline, returning True on stop."""
        try:
            item: object = self._wake_queue.get(timeout=self._next_delay())
        except queue.Empty:
            item = None

        woke: bool = item is _WAKE
        stop: bool = item is _STOP

        # Coalesce bursts of wakes into one pass
        while not stop:
            try:
                extra: object = self._wake_queue.get_nowait()
            except queue.Empty:
                break
            woke = woke or extra is _WAKE
            stop = extra is _STOP

        if stop:
            return True

        if woke:
            self._retry_pending()
        self._expire_overdue()
        return False

    def _next_delay(self) -> Optional[float]:
        with self._lock:
            if not self._pending:
                return None
            deadline_s: float = min(r.deadline_s for r in self._pending.values())
        return max(0.0, deadline_s - self._clock())

    def _retry_pending(self) -> None:
        with self._lock:
            snapshot: list[PendingRequest] = list(self._pending.values())

        for request in snapshot:
            if request.future.cancelled():
                self._discard(request)
                continue
            try:
                result: Transform = self._resolver.resolve(
                    request.target_frame, request.source_frame, request.t_ns
                )
            except ExtrapolationError as exc:
                if exc.expired:
                    self._finish(request, error=exc)
                continue
            except TransformerError:
                continue
            except Exception as exc:
                self._finish(request, error=exc)
                continue
            self._finish(request, result=result)

    def _expire_overdue(self) -> None:
        now_s: float = self._clock()
        with self._lock:
            overdue: list[PendingRequest] = [
                request
                for request in self._pending.values()
                if request.is_overdue(now_s)
            ]

        for request in overdue:
            waited_s: float = now_s - request.created_s
            self._finish(
                request,
                error=RequestTimeoutError(
                    f"Timed out after {waited_s:.3f} s waiting for {request.describe()}"
                ),
            )

    def _discard(self, request: PendingRequest) -> None:
        with self._lock:
            self._pending.pop(request.request_id, None)
        self._log.debug(f"Dropped cancelled {request.describe()}")

    def _finish(
        self,
        request: PendingRequest,
        *,
        result: Optional[Transform] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        with self._lock:
            if self._pending.pop(request.request_id, None) is None:
                return

        # Completion runs caller continuations, so it happens outside the lock
        _complete(request.future, result=result, error=error)
        if error is None:
            self._log.debug(f"Resolved {request.describe()}")
        else:
            self._log.debug(f"Failed {request.describe()}: {error}")


def _complete(
    future: Future[Transform],
    *,
    result: Optional[Transform] = None,
    error: Optional[BaseException] = None,
) -> None:
    """Complete a future once, tolerating a concurrent cancel by its owner."""
    try:
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)  # type: ignore[arg-type]
    except InvalidStateError:
        # The caller cancelled the future first
        pass
