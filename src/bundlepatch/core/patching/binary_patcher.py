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


"""
In-place prefix rewriting for ELF objects.

Absolute paths inside a compiled object sit at fixed offsets that other parts
of the file point at, so a patch may never move a byte: the file length and
every byte outside a rewritten string stay exactly as they were.

A replacement that is no longer than the original is padded with NUL bytes
up to the original length and written over each occurrence. Readers that
treat the region as a C string stop at the first NUL and see the new path.

A longer replacement is checked string by string against the NUL-terminated
region that encloses the occurrence. The region offers no room beyond its own
length, so such occurrences are reported and left untouched.
"""

from dataclasses import dataclass

from loguru import logger

from bundlepatch.core.exceptions import FileSystemError
from bundlepatch.core.patching.file_io import read_bytes, write_bytes
from bundlepatch.core.patching.models import (
    FileRecord,
    PathPrefix,
    PatchOutcome,
    PatchReason,
)

NUL = b"\x00"


@dataclass(frozen=True)
class StringExtent:
    """A NUL-terminated string region; end is the terminator offset."""

    start: int
    end: int

    @property
    def width(self) -> int:
        return self.end - self.start


class StringExtentAnalyzer:
    def extent_at(self, data: bytearray, start: int) -> StringExtent:
        end = data.find(NUL, start)
        if end == -1:
            end = len(data)
        return StringExtent(start, end)

    def rewrite(
        self, data: bytearray, extent: StringExtent, old: bytes, new: bytes
    ) -> bytes | None:
        """
        Return the replacement for the whole region, NUL padded to its width,
        or None when the rewritten string does not fit.
        """
        candidate = bytes(data[extent.start : extent.end]).replace(old, new)
        if len(candidate) > extent.width:
            return None
        return candidate.ljust(extent.width, NUL)


class BinaryPatcher:
    def __init__(self, analyzer: StringExtentAnalyzer | None = None):
        self.analyzer = analyzer or StringExtentAnalyzer()

    def patch(self, record: FileRecord, prefix: PathPrefix) -> PatchOutcome:
        try:
            return self._patch(record, prefix)
        except FileSystemError as e:
            logger.error(f"{e.message}: {e.details}")
            return PatchOutcome.io_error(record, e)

    def _patch(self, record: FileRecord, prefix: PathPrefix) -> PatchOutcome:
        if prefix.is_noop:
            return PatchOutcome.untouched(record)

        data = bytearray(read_bytes(record.path))

        if data.find(prefix.old_bytes) == -1:
            return PatchOutcome.untouched(record)

        if prefix.grows:
            patched, skipped = self._patch_strings(record, data, prefix)
        else:
            patched, skipped = self._patch_padded(data, prefix), 0

        if patched:
            write_bytes(record.path, bytes(data))
            logger.debug(
                f"Patched ELF file: {record.path} ({patched} occurrences)"
            )
            return PatchOutcome(
                record.path,
                record.kind,
                True,
                PatchReason.PATCHED,
                occurrences=patched,
                skipped=skipped,
            )

        return PatchOutcome(
            record.path,
            record.kind,
            False,
            PatchReason.INSUFFICIENT_SPACE,
            skipped=skipped,
        )

    def _patch_padded(self, data: bytearray, prefix: PathPrefix) -> int:
        old = prefix.old_bytes
        replacement = prefix.new_bytes.ljust(len(old), NUL)

        count = 0
        index = data.find(old)
        while index != -1:
            data[index : index + len(old)] = replacement
            count += 1
            index = data.find(old, index + len(old))

        return count

    def _patch_strings(
        self, record: FileRecord, data: bytearray, prefix: PathPrefix
    ) -> tuple[int, int]:
        old, new = prefix.old_bytes, prefix.new_bytes
        patched = skipped = 0

        index = data.find(old)
        while index != -1:
            extent = self.analyzer.extent_at(data, index)
            replacement = self.analyzer.rewrite(data, extent, old, new)

            if replacement is None:
                region = bytes(data[extent.start : extent.end])
                logger.warning(
                    f"Cannot patch (no space): {region.decode('utf-8', errors='replace')} "
                    f"in {record.path.name} at offset {extent.start}"
                )
                skipped += 1
            else:
                # only reachable with an analyzer whose rewrite can fit
                data[extent.start : extent.end] = replacement
                patched += 1

            # resume after the terminator, the region is done either way
            index = data.find(old, max(extent.end, index + len(old)))

        return patched, skipped
