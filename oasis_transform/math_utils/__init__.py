################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Rotation and rigid transform math."""

from oasis_transform.math_utils.quat import Quaternion
from oasis_transform.math_utils.se3 import SE3


__all__ = ["Quaternion", "SE3"]
