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


import json
from unittest.mock import patch

import pytest

from bundlepatch.core.exceptions import StateError
from bundlepatch.core.state.state_store import InitStateStore


@pytest.fixture
def store(tmp_path):
    return InitStateStore(tmp_path / "state" / "init_state.json")


def test_fresh_store_is_uninitialized(store, tmp_path):
    assert store.get_version(tmp_path) == 0
    assert store.is_initialized(tmp_path, 1) is False


def test_mark_initialized_persists(store, tmp_path):
    store.mark_initialized(tmp_path, 1)

    reloaded = InitStateStore(store.state_file)
    assert reloaded.get_version(tmp_path) == 1
    assert reloaded.is_initialized(tmp_path, 1) is True


def test_version_never_goes_down(store, tmp_path):
    store.mark_initialized(tmp_path, 3)
    store.mark_initialized(tmp_path, 2)

    assert store.get_version(tmp_path) == 3
    assert store.is_initialized(tmp_path, 4) is False


def test_roots_are_tracked_separately(store, tmp_path):
    a, b = tmp_path / "a", tmp_path / "b"
    a.mkdir()
    b.mkdir()

    store.mark_initialized(a, 1)

    assert store.get_version(a) == 1
    assert store.get_version(b) == 0


def test_reset(store, tmp_path):
    store.mark_initialized(tmp_path, 1)

    assert store.reset(tmp_path) is True
    assert store.get_version(tmp_path) == 0
    assert store.reset(tmp_path) is False


def test_corrupt_file_is_treated_as_empty(store, tmp_path):
    store.state_file.parent.mkdir(parents=True)
    store.state_file.write_text("{not json")

    assert store.get_version(tmp_path) == 0

    store.mark_initialized(tmp_path, 1)
    assert json.loads(store.state_file.read_text()) == {str(tmp_path.resolve()): 1}


def test_save_failure_raises_state_error(store, tmp_path):
    with patch("builtins.open", side_effect=PermissionError("read-only")):
        with pytest.raises(StateError):
            store.mark_initialized(tmp_path, 1)
