################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Transports that carry transform samples between transformers."""

from oasis_transform.communicator.in_memory_communicator import InMemoryCommunicator
from oasis_transform.communicator.in_memory_communicator import InMemoryTransportBus
from oasis_transform.communicator.transform_communicator import IngestCallback
from oasis_transform.communicator.transform_communicator import TransformCommunicator


__all__ = [
    "InMemoryCommunicator",
    "InMemoryTransportBus",
    "IngestCallback",
    "TransformCommunicator",
]
