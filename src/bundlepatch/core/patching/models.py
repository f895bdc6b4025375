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


from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from bundlepatch.core.exceptions import empty_prefix, nul_in_prefix


class FileKind(Enum):
    TEXT = "text"
    OBJECT_BINARY = "object_binary"
    UNKNOWN = "unknown"


class PatchReason(Enum):
    NO_OCCURRENCE = "no occurrence found"
    PATCHED = "patched"
    INSUFFICIENT_SPACE = "skipped, insufficient space"
    IO_ERROR = "I/O error"


@dataclass(frozen=True)
class PathPrefix:
    """The prefix baked into the bundle and the one it should point to."""

    old: str
    new: str

    def __post_init__(self):
        if not self.old:
            raise empty_prefix()
        if "\x00" in self.old or "\x00" in self.new:
            raise nul_in_prefix()

    @property
    def old_bytes(self) -> bytes:
        return self.old.encode("utf-8")

    @property
    def new_bytes(self) -> bytes:
        return self.new.encode("utf-8")

    @property
    def is_noop(self) -> bool:
        return self.old == self.new

    @property
    def grows(self) -> bool:
        """True when the replacement needs more bytes than the original."""
        return len(self.new_bytes) > len(self.old_bytes)


@dataclass(frozen=True)
class FileRecord:
    path: Path
    kind: FileKind


@dataclass(frozen=True)
class PatchOutcome:
    path: Path
    kind: FileKind
    changed: bool
    reason: PatchReason
    occurrences: int = 0
    skipped: int = 0
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.reason is PatchReason.IO_ERROR

    @classmethod
    def untouched(cls, record: FileRecord) -> "PatchOutcome":
        return cls(record.path, record.kind, False, PatchReason.NO_OCCURRENCE)

    @classmethod
    def io_error(cls, record: FileRecord, error: Exception) -> "PatchOutcome":
        return cls(
            record.path,
            record.kind,
            False,
            PatchReason.IO_ERROR,
            error=str(error),
        )


@dataclass
class ScanReport:
    """Aggregated result of one patch_all call."""

    files_scanned: int = 0
    files_patched: int = 0
    files_failed: int = 0
    files_skipped: int = 0
    noop: bool = False
    outcomes: list[PatchOutcome] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.files_failed == 0

    def add(self, outcome: PatchOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.changed:
            self.files_patched += 1
        elif outcome.failed:
            self.files_failed += 1

    def unpatchable(self) -> list[PatchOutcome]:
        """Outcomes that still hold occurrences nothing could rewrite."""
        return [o for o in self.outcomes if o.skipped]
