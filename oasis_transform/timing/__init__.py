################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Nanosecond timestamp helpers."""

from oasis_transform.timing.time_base import TIME_LATEST
from oasis_transform.timing.time_base import TimeBaseError


__all__ = ["TIME_LATEST", "TimeBaseError"]
