################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Asynchronous transform requests."""

from oasis_transform.requests.pending_request import PendingRequest
from oasis_transform.requests.request_scheduler import RequestScheduler


__all__ = ["PendingRequest", "RequestScheduler"]
