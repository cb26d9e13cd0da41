################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Receiver and publisher facades over a shared transform engine."""

from oasis_transform.transformer.transform_publisher import TransformPublisher
from oasis_transform.transformer.transform_receiver import TransformReceiver
from oasis_transform.transformer.transformer_core import TransformerCore
from oasis_transform.transformer.transformer_factory import TransformerFactory


__all__ = [
    "TransformPublisher",
    "TransformReceiver",
    "TransformerCore",
    "TransformerFactory",
]
