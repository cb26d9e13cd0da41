################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Transport boundary that exchanges transform samples with remote peers."""

from __future__ import annotations

import abc
from typing import Callable
from typing import Optional

from oasis_transform.transform_types.transform_sample import TransformSample


# Called by a transport for every sample received from a peer
IngestCallback = Callable[[TransformSample], None]


class TransformCommunicator(abc.ABC):
    """
    Pluggable transport for transform samples.

    The transformer core holds exactly one communicator and hands it a single
    ingest callback. The communicator holds no other reference into the core.
    Transport errors are logged by the implementation and never surfaced to
    lookups; they only show up as stale or missing data.
    """

    def __init__(self, authority: str = "") -> None:
        self._authority: str = authority
        self._ingest_callback: Optional[IngestCallback] = None

    @property
    def authority(self) -> str:
        """Name stamped on samples published by this communicator."""
        return self._authority

    def set_ingest_callback(self, callback: IngestCallback) -> None:
        """Register the function that receives samples from peers."""
        self._ingest_callback = callback

    def _deliver(self, sample: TransformSample) -> None:
        """Pass a received sample to the registered callback, if any."""
        callback: Optional[IngestCallback] = self._ingest_callback
        if callback is not None:
            callback(sample)

    @abc.abstractmethod
    def start(self) -> None:
        """Begin receiving samples from peers."""

    @abc.abstractmethod
    def publish(self, sample: TransformSample) -> None:
        """Send a locally authored sample to peers."""

    @abc.abstractmethod
    def shutdown(self) -> None:
        """
        Release all transport resources.

        Must be idempotent, must unblock any in-flight receive, and must return
        only after the resources are released.
        """
