################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Per-frame transform history and the frame graph."""

from oasis_transform.buffer.frame_graph import FrameGraph
from oasis_transform.buffer.history_buffer import HistoryBuffer
from oasis_transform.buffer.history_buffer import LookupStatus
from oasis_transform.buffer.history_buffer import SampleLookup


__all__ = ["FrameGraph", "HistoryBuffer", "LookupStatus", "SampleLookup"]
