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


import os

import pytest

from bundlepatch.core.patching.classifier import FileClassifier
from bundlepatch.core.patching.models import FileKind

# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "name", ["env.sh", "site.py", "pkg.pc", "libfoo.la", "config.cmake", "aclocal.m4"]
)
def test_allowlisted_extension_is_text(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b"no shebang here")

    assert FileClassifier().classify(path) is FileKind.TEXT


def test_shebang_with_unknown_extension_is_text(tmp_path):
    path = tmp_path / "run"
    path.write_bytes(b"#!/data/data/com.termux/files/usr/bin/sh\necho hi\n")

    assert FileClassifier().classify(path) is FileKind.TEXT


def test_elf_magic_is_object_binary(tmp_path, make_elf):
    path = make_elf(tmp_path / "lib" / "libx.so", b"body")

    assert FileClassifier().classify(path) is FileKind.OBJECT_BINARY


def test_elf_magic_wins_over_text_extension(tmp_path, make_elf):
    path = make_elf(tmp_path / "weird.txt", b"body")

    assert FileClassifier().classify(path) is FileKind.OBJECT_BINARY


def test_unrecognized_file_is_unknown(tmp_path):
    path = tmp_path / "image.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n")

    assert FileClassifier().classify(path) is FileKind.UNKNOWN


def test_empty_file_is_unknown(tmp_path):
    path = tmp_path / "empty"
    path.write_bytes(b"")

    assert FileClassifier().classify(path) is FileKind.UNKNOWN


def test_short_file_is_unknown(tmp_path):
    path = tmp_path / "short"
    path.write_bytes(b"\x7fE")

    assert FileClassifier().classify(path) is FileKind.UNKNOWN


def test_missing_file_is_unknown(tmp_path):
    assert FileClassifier().classify(tmp_path / "gone.sh") is FileKind.UNKNOWN


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="root can read files regardless of permissions",
)
def test_unreadable_file_is_unknown(tmp_path):
    path = tmp_path / "secret.sh"
    path.write_bytes(b"#!/bin/sh\n")
    path.chmod(0o000)
    try:
        assert FileClassifier().classify(path) is FileKind.UNKNOWN
    finally:
        path.chmod(0o644)


def test_record_carries_kind(tmp_path):
    path = tmp_path / "a.json"
    path.write_bytes(b"{}")

    record = FileClassifier().record(path)
    assert record.path == path
    assert record.kind is FileKind.TEXT
