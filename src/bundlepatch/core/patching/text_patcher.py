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


from loguru import logger

from bundlepatch.core.exceptions import FileReadError, FileSystemError
from bundlepatch.core.patching.file_io import read_bytes, write_bytes
from bundlepatch.core.patching.models import (
    FileRecord,
    PathPrefix,
    PatchOutcome,
    PatchReason,
)


class TextPatcher:
    """Whole-file prefix replacement for scripts and config files."""

    def patch(self, record: FileRecord, prefix: PathPrefix) -> PatchOutcome:
        try:
            return self._patch(record, prefix)
        except FileSystemError as e:
            logger.error(f"{e.message}: {e.details}")
            return PatchOutcome.io_error(record, e)

    def _patch(self, record: FileRecord, prefix: PathPrefix) -> PatchOutcome:
        if prefix.is_noop:
            return PatchOutcome.untouched(record)

        raw = read_bytes(record.path)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FileReadError(f"{record.path} is not valid UTF-8", str(e)) from e

        count = text.count(prefix.old)
        if count == 0:
            return PatchOutcome.untouched(record)

        # text files carry no offsets, so the length is free to change
        write_bytes(record.path, text.replace(prefix.old, prefix.new).encode("utf-8"))

        logger.debug(f"Patched text file: {record.path} ({count} occurrences)")
        return PatchOutcome(
            record.path, record.kind, True, PatchReason.PATCHED, occurrences=count
        )
