################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Exceptions raised by transform lookups and requests."""

from __future__ import annotations


class TransformerError(Exception):
    """Base class for all transform resolution failures."""


class FrameNotFoundError(TransformerError):
    """Raised when a frame has never been referenced by any sample."""

    def __init__(self, frame: str) -> None:
        super().__init__(f'Frame "{frame}" does not exist in the frame graph')
        self.frame: str = frame


class ConnectivityError(TransformerError):
    """Raised when two frames share no common ancestor at the queried time."""


class ExtrapolationError(TransformerError):
    """Raised when a query time cannot be served under the active policy.

    Attributes:
        frame: Frame whose history could not serve the query
        t_ns: Requested timestamp in nanoseconds
        expired: True when the data aged out of the cache and can never
            arrive, False when newer data may still be ingested
    """

    def __init__(self, message: str, *, frame: str, t_ns: int, expired: bool) -> None:
        super().__init__(message)
        self.frame: str = frame
        self.t_ns: int = t_ns
        self.expired: bool = expired


class RequestTimeoutError(TransformerError):
    """Raised through a future when its deadline elapsed before resolution."""


class RequestCancelledError(TransformerError):
    """Raised through a future when the core shut down before resolution."""


class TransformSampleError(TransformerError):
    """Raised when a transform sample is malformed."""


class TransformerConfigError(TransformerError):
    """Raised when transformer configuration validation fails."""
