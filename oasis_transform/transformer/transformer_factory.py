################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Construction helpers for receivers and publishers
"""

from __future__ import annotations

import logging
from typing import Optional

from oasis_transform.communicator.transform_communicator import TransformCommunicator
from oasis_transform.config.transformer_config import TransformerConfig
from oasis_transform.transformer.transform_publisher import TransformPublisher
from oasis_transform.transformer.transform_receiver import TransformReceiver
from oasis_transform.transformer.transformer_core import TransformerCore


class TransformerFactory:
    """
    Builds started transformer cores around a communicator
    """

    def __init__(
        self,
        config: Optional[TransformerConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._config: TransformerConfig = config or TransformerConfig()
        self._logger: Optional[logging.Logger] = logger

    @property
    def config(self) -> TransformerConfig:
        return self._config

    def create_core(self, communicator: TransformCommunicator) -> TransformerCore:
        core: TransformerCore = TransformerCore(
            self._config, communicator, logger=self._logger
        )
        core.start()
        return core

    def create_receiver(self, communicator: TransformCommunicator) -> TransformReceiver:
        """Create a receiver that listens on the given communicator."""
        return TransformReceiver(self.create_core(communicator))

    def create_publisher(
        self, communicator: TransformCommunicator
    ) -> TransformPublisher:
        """Create a publisher that sends through the given communicator."""
        return TransformPublisher(self.create_core(communicator))
