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
Publication surface for locally measured transforms
"""

from __future__ import annotations

from typing import Iterable

from oasis_transform.config.transformer_config import TransformerConfig
from oasis_transform.transform_types.transform_sample import TransformSample
from oasis_transform.transformer.transformer_core import TransformerCore


class TransformPublisher:
    """
    Sends transforms to peers and records them locally

    Static samples are latched as valid at all times by every receiver.
    """

    def __init__(self, core: TransformerCore) -> None:
        self._core: TransformerCore = core

    @property
    def config(self) -> TransformerConfig:
        return self._core.config

    @property
    def authority(self) -> str:
        return self._core.communicator.authority

    def send_transform(self, sample: TransformSample) -> bool:
        """
        Publish one transform

        :return: False if the sample was too old for the local history and was
            neither stored nor sent
        """
        return self._core.publish_sample(sample)

    def send_transforms(self, samples: Iterable[TransformSample]) -> int:
        """Publish several transforms, returning how many were accepted."""
        accepted: int = 0
        for sample in samples:
            if self._core.publish_sample(sample):
                accepted += 1
        return accepted

    def shutdown(self) -> None:
        self._core.shutdown()
