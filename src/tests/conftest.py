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
from pathlib import Path

import pytest
from loguru import logger

ELF_HEADER = b"\x7fELF\x02\x01\x01\x00" + b"\x00" * 8


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep config, state and logs of a test run inside tmp_path."""
    for key in list(os.environ):
        if key.upper().startswith("BUNDLEPATCH_"):
            monkeypatch.delenv(key)

    monkeypatch.setattr(
        "bundlepatch.core.logging.logging.LOG_DIR", tmp_path / "logs"
    )
    monkeypatch.setattr(
        "bundlepatch.cli.GLOBAL_CONFIG_FILE", tmp_path / "global" / "bundlepatch.toml"
    )
    monkeypatch.setattr(
        "bundlepatch.commands.config.GLOBAL_CONFIG_FILE",
        tmp_path / "global" / "bundlepatch.toml",
    )
    monkeypatch.chdir(tmp_path)
    yield
    logger.remove()


@pytest.fixture
def make_elf():
    """Write a minimal ELF-looking file: the magic header followed by body."""

    def _make(path: Path, body: bytes) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(ELF_HEADER + body)
        return path

    return _make


@pytest.fixture
def make_text():
    def _make(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _make
