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

import pytest

from bundlepatch.core.exceptions import ValidationError
from bundlepatch.core.patching.models import (
    FileKind,
    FileRecord,
    PathPrefix,
    PatchOutcome,
    PatchReason,
    ScanReport,
)


def test_prefix_bytes_are_utf8():
    prefix = PathPrefix("/data/data/com.termux", "/data/data/cöm.x")

    assert prefix.old_bytes == b"/data/data/com.termux"
    assert prefix.new_bytes == "/data/data/cöm.x".encode("utf-8")


def test_prefix_grows_compares_bytes_not_characters():
    # same number of characters, one more byte
    assert PathPrefix("/abc", "/abç").grows is True
    assert PathPrefix("/abc", "/ab").grows is False


def test_prefix_noop():
    assert PathPrefix("/a", "/a").is_noop is True
    assert PathPrefix("/a", "/b").is_noop is False


def test_empty_old_prefix_raises():
    with pytest.raises(ValidationError):
        PathPrefix("", "/x")


def test_report_counts():
    record = FileRecord(Path("a"), FileKind.TEXT)
    report = ScanReport()

    report.add(PatchOutcome(record.path, record.kind, True, PatchReason.PATCHED, 1))
    report.add(PatchOutcome.untouched(record))
    report.add(PatchOutcome.io_error(record, OSError("denied")))
    report.add(
        PatchOutcome(
            record.path, record.kind, False, PatchReason.INSUFFICIENT_SPACE, skipped=2
        )
    )

    assert report.files_patched == 1
    assert report.files_failed == 1
    assert report.success is False
    assert len(report.outcomes) == 4
    assert [o.reason for o in report.unpatchable()] == [PatchReason.INSUFFICIENT_SPACE]


def test_empty_report_is_success():
    assert ScanReport().success is True


@pytest.mark.parametrize(
    "old, new", [("\x00/a", "\x00/abc"), ("/a", "/a\x00b"), ("/a\x00", "/b")]
)
def test_nul_in_prefix_raises(old, new):
    with pytest.raises(ValidationError, match="NUL"):
        PathPrefix(old, new)
