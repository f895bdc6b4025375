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


from pathlib import Path

from loguru import logger

from bundlepatch.core.exceptions import directory_missing
from bundlepatch.core.patching.binary_patcher import BinaryPatcher
from bundlepatch.core.patching.classifier import FileClassifier
from bundlepatch.core.patching.models import (
    FileKind,
    FileRecord,
    PathPrefix,
    PatchOutcome,
    ScanReport,
)
from bundlepatch.core.patching.text_patcher import TextPatcher
from bundlepatch.core.patching.tree_walker import list_files


class PatchOrchestrator:
    """Walks a bundle root and rewrites the prefix in every file it can."""

    def __init__(
        self,
        classifier: FileClassifier | None = None,
        text_patcher: TextPatcher | None = None,
        binary_patcher: BinaryPatcher | None = None,
    ):
        self.classifier = classifier or FileClassifier()
        self.patchers = {
            FileKind.TEXT: text_patcher or TextPatcher(),
            FileKind.OBJECT_BINARY: binary_patcher or BinaryPatcher(),
        }

    def patch_all(self, root: Path, prefix: PathPrefix) -> ScanReport:
        if prefix.is_noop:
            logger.info("Package paths match, no patching needed")
            return ScanReport(noop=True)

        logger.info(f"Patching bundle: {prefix.old} -> {prefix.new}")

        if not root.is_dir():
            raise directory_missing(str(root))

        report = ScanReport()
        files = list_files(root)
        report.files_scanned = len(files)
        logger.info(f"Found {len(files)} files to check")

        for path in files:
            record = self.classifier.record(path)
            if record.kind is FileKind.UNKNOWN:
                report.files_skipped += 1
                continue

            report.add(self._patch_one(record, prefix))

        logger.info(
            f"Patching complete: {report.files_patched} files patched, "
            f"{report.files_failed} failed"
        )
        return report

    def _patch_one(self, record: FileRecord, prefix: PathPrefix) -> PatchOutcome:
        try:
            return self.patchers[record.kind].patch(record, prefix)
        except Exception as e:
            logger.error(f"Failed to patch: {record.path} - {e}")
            return PatchOutcome.io_error(record, e)


def patch_all(root: Path, old: str, new: str) -> ScanReport:
    """Rewrite every occurrence of the old prefix under root."""
    return PatchOrchestrator().patch_all(Path(root), PathPrefix(old, new))
