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
Transform engine shared by the receiver and publisher facades
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Optional

from oasis_transform.buffer.frame_graph import FrameGraph
from oasis_transform.communicator.transform_communicator import TransformCommunicator
from oasis_transform.config.transformer_config import TransformerConfig
from oasis_transform.requests.request_scheduler import RequestScheduler
from oasis_transform.resolver.transform_resolver import TransformResolver
from oasis_transform.transform_types.transform import Transform
from oasis_transform.transform_types.transform_sample import TransformSample


_LOG: logging.Logger = logging.getLogger(__name__)


class TransformerCore:
    """
    Owns the frame graph, resolver and request scheduler of one transformer

    Samples from peers arrive through the communicator's ingest callback, are
    inserted into the frame graph, and wake the request scheduler. Every core
    has its own graph; cores in the same process share nothing.
    """

    def __init__(
        self,
        config: TransformerConfig,
        communicator: TransformCommunicator,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        # Construction parameters
        self._config: TransformerConfig = config
        self._communicator: TransformCommunicator = communicator
        self._log: logging.Logger = logger or _LOG

        # Engine state
        self._graph: FrameGraph = FrameGraph(config)
        self._resolver: TransformResolver = TransformResolver(self._graph)
        self._scheduler: RequestScheduler = RequestScheduler(
            self._resolver,
            default_timeout_sec=config.request_timeout_sec(),
            logger=self._log,
        )

        # Lifecycle
        self._lock: threading.Lock = threading.Lock()
        self._started: bool = False
        self._shut_down: bool = False

        self._communicator.set_ingest_callback(self.ingest_sample)

    @property
    def config(self) -> TransformerConfig:
        return self._config

    @property
    def graph(self) -> FrameGraph:
        return self._graph

    @property
    def communicator(self) -> TransformCommunicator:
        return self._communicator

    def start(self) -> None:
        """Start the request scheduler and the communicator."""
        with self._lock:
            if self._started or self._shut_down:
                return
            self._started = True

        self._scheduler.start()
        self._communicator.start()
        self._log.info(f"Transformer core started with {self._config}")

    def ingest_sample(self, sample: TransformSample) -> bool:
        """
        Insert a sample and wake pending requests

        :return: False if the sample was too old to keep in its history
        """
        accepted: bool = self._graph.insert_sample(sample)
        if not accepted:
            self._log.warning(
                f"Rejected stale transform {sample.parent_frame} -> "
                f"{sample.child_frame} at {sample.t_ns} ns from "
                f'"{sample.authority}"'
            )
            return False

        self._scheduler.notify((sample.child_frame, sample.parent_frame))
        return True

    def publish_sample(self, sample: TransformSample) -> bool:
        """Insert a locally authored sample and send it to peers."""
        if not sample.authority and self._communicator.authority:
            sample = sample.with_authority(self._communicator.authority)
        accepted: bool = self.ingest_sample(sample)
        if accepted:
            self._communicator.publish(sample)
        return accepted

    def lookup_transform(
        self, target_frame: str, source_frame: str, t_ns: int
    ) -> Transform:
        return self._resolver.resolve(target_frame, source_frame, t_ns)

    def lookup_transform_full(
        self,
        target_frame: str,
        target_t_ns: int,
        source_frame: str,
        source_t_ns: int,
        fixed_frame: str,
    ) -> Transform:
        return self._resolver.resolve_full(
            target_frame, target_t_ns, source_frame, source_t_ns, fixed_frame
        )

    def can_transform(self, target_frame: str, source_frame: str, t_ns: int) -> bool:
        return self._resolver.can_resolve(target_frame, source_frame, t_ns)

    def can_transform_full(
        self,
        target_frame: str,
        target_t_ns: int,
        source_frame: str,
        source_t_ns: int,
        fixed_frame: str,
    ) -> bool:
        return self._resolver.can_resolve_full(
            target_frame, target_t_ns, source_frame, source_t_ns, fixed_frame
        )

    def request_transform(
        self,
        target_frame: str,
        source_frame: str,
        t_ns: int,
        timeout_sec: Optional[float] = None,
    ) -> Future[Transform]:
        return self._scheduler.request(target_frame, source_frame, t_ns, timeout_sec)

    def pending_request_count(self) -> int:
        return self._scheduler.pending_count()

    def shutdown(self) -> None:
        """
        Cancel pending requests, then release the communicator

        Idempotent and callable from any thread. Returns after the
        communicator has released its resources.
        """
        with self._lock:
            if self._shut_down:
                return
            self._shut_down = True

        self._scheduler.shutdown()
        self._communicator.shutdown()
        self._log.info("Transformer core shut down")
