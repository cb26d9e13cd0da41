################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Time-indexed coordinate frame transforms shared between processes."""

from __future__ import annotations

from oasis_transform.communicator.in_memory_communicator import InMemoryCommunicator
from oasis_transform.communicator.in_memory_communicator import InMemoryTransportBus
from oasis_transform.communicator.transform_communicator import TransformCommunicator
from oasis_transform.config.transformer_config import TransformerConfig
from oasis_transform.config.transformer_params import TransformerParams
from oasis_transform.errors.transformer_errors import ConnectivityError
from oasis_transform.errors.transformer_errors import ExtrapolationError
from oasis_transform.errors.transformer_errors import FrameNotFoundError
from oasis_transform.errors.transformer_errors import RequestCancelledError
from oasis_transform.errors.transformer_errors import RequestTimeoutError
from oasis_transform.errors.transformer_errors import TransformerConfigError
from oasis_transform.errors.transformer_errors import TransformerError
from oasis_transform.errors.transformer_errors import TransformSampleError
from oasis_transform.math_utils.quat import Quaternion
from oasis_transform.math_utils.se3 import SE3
from oasis_transform.transform_types.extrapolation_policy import ExtrapolationPolicy
from oasis_transform.transform_types.transform import Transform
from oasis_transform.transform_types.transform_sample import TransformSample
from oasis_transform.transformer.transform_publisher import TransformPublisher
from oasis_transform.transformer.transform_receiver import TransformReceiver
from oasis_transform.transformer.transformer_core import TransformerCore
from oasis_transform.transformer.transformer_factory import TransformerFactory


__all__ = [
    "ConnectivityError",
    "ExtrapolationError",
    "ExtrapolationPolicy",
    "FrameNotFoundError",
    "InMemoryCommunicator",
    "InMemoryTransportBus",
    "Quaternion",
    "RequestCancelledError",
    "RequestTimeoutError",
    "SE3",
    "Transform",
    "TransformCommunicator",
    "TransformPublisher",
    "TransformReceiver",
    "TransformSample",
    "TransformSampleError",
    "TransformerConfig",
    "TransformerConfigError",
    "TransformerCore",
    "TransformerError",
    "TransformerFactory",
    "TransformerParams",
]
