# -----------------------------------------------------------------------------
# bundlepatch - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of bundlepatch.
#
# bundlepatch is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------


from .binary_patcher import BinaryPatcher, StringExtent, StringExtentAnalyzer
from .classifier import FileClassifier
from .models import (
    FileKind,
    FileRecord,
    PathPrefix,
    PatchOutcome,
    PatchReason,
    ScanReport,
)
from .orchestrator import PatchOrchestrator, patch_all
from .text_patcher import TextPatcher
from .tree_walker import list_files

__all__ = [
    "BinaryPatcher",
    "FileClassifier",
    "FileKind",
    "FileRecord",
    "PathPrefix",
    "PatchOrchestrator",
    "PatchOutcome",
    "PatchReason",
    "ScanReport",
    "StringExtent",
    "StringExtentAnalyzer",
    "TextPatcher",
    "list_files",
    "patch_all",
]
