################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Transform resolution across the frame graph."""

from oasis_transform.resolver.transform_resolver import MAX_GRAPH_DEPTH
from oasis_transform.resolver.transform_resolver import TransformResolver


__all__ = ["MAX_GRAPH_DEPTH", "TransformResolver"]
