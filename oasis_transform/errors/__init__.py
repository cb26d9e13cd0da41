################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Errors raised by transform lookups and configuration."""

from oasis_transform.errors.transformer_errors import ConnectivityError
from oasis_transform.errors.transformer_errors import ExtrapolationError
from oasis_transform.errors.transformer_errors import FrameNotFoundError
from oasis_transform.errors.transformer_errors import RequestCancelledError
from oasis_transform.errors.transformer_errors import RequestTimeoutError
from oasis_transform.errors.transformer_errors import TransformerConfigError
from oasis_transform.errors.transformer_errors import TransformerError
from oasis_transform.errors.transformer_errors import TransformSampleError


__all__ = [
    "ConnectivityError",
    "ExtrapolationError",
    "FrameNotFoundError",
    "RequestCancelledError",
    "RequestTimeoutError",
    "TransformSampleError",
    "TransformerConfigError",
    "TransformerError",
]
