################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Value types for transform samples and lookup results."""

from oasis_transform.transform_types.extrapolation_policy import ExtrapolationPolicy
from oasis_transform.transform_types.transform import Transform
from oasis_transform.transform_types.transform_sample import TransformSample


__all__ = ["ExtrapolationPolicy", "Transform", "TransformSample"]
