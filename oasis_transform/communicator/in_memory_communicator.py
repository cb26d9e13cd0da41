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
In-process publish/subscribe transport for transform samples
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Optional

from oasis_transform.communicator.transform_communicator import TransformCommunicator
from oasis_transform.transform_types.transform_sample import TransformSample


_LOG: logging.Logger = logging.getLogger(__name__)

# Queue item that ends a receive thread
_STOP: object = object()


class InMemoryTransportBus:
    """
    Fan-out hub connecting communicators that live in the same process
    """

    def __init__(self) -> None:
        self._lock: threading.Lock = threading.Lock()
        self._peers: list[InMemoryCommunicator] = []

    def attach(self, peer: InMemoryCommunicator) -> None:
        with self._lock:
            if peer not in self._peers:
                self._peers.append(peer)

    def detach(self, peer: InMemoryCommunicator) -> None:
        with self._lock:
            if peer in self._peers:
                self._peers.remove(peer)

    def peer_count(self) -> int:
        with self._lock:
            return len(self._peers)

    def broadcast(
        self, payload: object, sender: Optional[InMemoryCommunicator] = None
    ) -> None:
        """
        Deliver a payload to every attached peer except the sender

        Payloads are not validated here; receivers drop what they cannot read.
        """
        with self._lock:
            peers: list[InMemoryCommunicator] = [
                peer for peer in self._peers if peer is not sender
            ]
        for peer in peers:
            peer.enqueue(payload)


class InMemoryCommunicator(TransformCommunicator):
    """
    Communicator backed by an InMemoryTransportBus

    Each instance owns a receive thread that drains its inbox and hands
    samples to the ingest callback.
    """

    def __init__(
        self,
        bus: InMemoryTransportBus,
        authority: str = "",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(authority)

        # Construction parameters
        self._bus: InMemoryTransportBus = bus
        self._log: logging.Logger = logger or _LOG

        # Threading parameters
        self._lock: threading.Lock = threading.Lock()
        self._inbox: queue.Queue[object] = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._started: bool = False
        self._stopped: bool = False

    def is_running(self) -> bool:
        with self._lock:
            return self._started and not self._stopped

    def start(self) -> None:
        with self._lock:
            if self._started or self._stopped:
                return
            self._started = True
            self._thread = threading.Thread(
                target=self._receive_loop,
                name=f"transform_receiver_{self._authority or id(self)}",
                daemon=True,
            )
            self._thread.start()

        self._bus.attach(self)
        self._log.info(f'In-memory communicator "{self._authority}" started')

    def publish(self, sample: TransformSample) -> None:
        with self._lock:
            stopped: bool = self._stopped
        if stopped:
            self._log.warning(
                f"Dropping transform {sample.parent_frame} -> {sample.child_frame} "
                "published after shutdown"
            )
            return

        if not sample.authority and self._authority:
            sample = sample.with_authority(self._authority)
        self._bus.broadcast(sample, sender=self)

    def enqueue(self, payload: object) -> None:
        """Accept a payload from the bus for the receive thread."""
        self._inbox.put(payload)

    def shutdown(self) -> None:
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
            thread: Optional[threading.Thread] = self._thread

        self._bus.detach(self)

        # Unblock the receive thread and wait for it to drain
        self._inbox.put(_STOP)
        if thread is not None and thread is not threading.current_thread():
            thread.join()

        self._log.info(f'In-memory communicator "{self._authority}" shut down')

    def _receive_loop(self) -> None:
        while True:
            payload: object = self._inbox.get()
            if payload is _STOP:
                return

            if not isinstance(payload, TransformSample):
                self._log.warning(
                    f"Dropping malformed payload of type {type(payload).__name__}"
                )
                continue

            try:
                self._deliver(payload)
            except Exception as exc:
                self._log.error(
                    f"Failed to ingest transform {payload.parent_frame} -> "
                    f"{payload.child_frame}: {exc!r}"
                )
