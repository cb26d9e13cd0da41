################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Transformer configuration."""

from oasis_transform.config.transformer_config import TransformerConfig
from oasis_transform.config.transformer_params import TransformerParams
from oasis_transform.config.transformer_params import TransformerParamsError


__all__ = ["TransformerConfig", "TransformerParams", "TransformerParamsError"]
