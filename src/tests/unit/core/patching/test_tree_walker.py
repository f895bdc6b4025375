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

from bundlepatch.core.patching.tree_walker import list_files


def test_lists_regular_files_recursively(tmp_path):
    (tmp_path / "bin").mkdir()
    (tmp_path / "lib" / "pkgconfig").mkdir(parents=True)
    (tmp_path / "bin" / "run").write_text("x")
    (tmp_path / "lib" / "libx.so").write_bytes(b"x")
    (tmp_path / "lib" / "pkgconfig" / "x.pc").write_text("x")
    (tmp_path / "empty").mkdir()

    files = list_files(tmp_path)

    assert files == sorted(
        [
            tmp_path / "bin" / "run",
            tmp_path / "lib" / "libx.so",
            tmp_path / "lib" / "pkgconfig" / "x.pc",
        ]
    )


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_symlinks_are_skipped(tmp_path):
    target = tmp_path / "real.sh"
    target.write_text("#!/bin/sh\n")
    (tmp_path / "link.sh").symlink_to(target)
    (tmp_path / "dirlink").symlink_to(tmp_path, target_is_directory=True)

    assert list_files(tmp_path) == [target]


def test_empty_root_gives_empty_list(tmp_path):
    assert list_files(tmp_path) == []


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="root can read directories regardless of permissions",
)
def test_unreadable_directory_is_skipped(tmp_path):
    readable = tmp_path / "etc" / "profile"
    readable.parent.mkdir()
    readable.write_text("x")
    locked = tmp_path / "locked"
    locked.mkdir()
    (locked / "hidden.sh").write_text("#!/bin/sh\n")
    locked.chmod(0o000)
    try:
        assert list_files(tmp_path) == [readable]
    finally:
        locked.chmod(0o755)
