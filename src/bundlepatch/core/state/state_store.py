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
from pathlib import Path

from loguru import logger

from bundlepatch.constants import INIT_STATE_FILE
from bundlepatch.core.exceptions import StateError


class InitStateStore:
    """
    Remembers which state version each bundle root was last initialized at.

    The record only ever moves forward: marking a lower version than the
    stored one is a no-op. Running the patcher is gated on this record so a
    bundle is relocated once per version.
    """

    def __init__(self, state_file: Path = INIT_STATE_FILE):
        self.state_file = state_file

    @staticmethod
    def _key(root: Path) -> str:
        return str(Path(root).resolve())

    def _load(self) -> dict[str, int]:
        if not self.state_file.exists():
            return {}

        try:
            with open(self.state_file, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable state file {self.state_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed state file {self.state_file}")
            return {}

        return {k: v for k, v in data.items() if isinstance(v, int)}

    def _save(self, data: dict[str, int]) -> None:
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.state_file, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
        except OSError as e:
            raise StateError(
                f"Failed to save state to {self.state_file}", str(e)
            ) from e

    def get_version(self, root: Path) -> int:
        return self._load().get(self._key(root), 0)

    def is_initialized(self, root: Path, version: int) -> bool:
        return self.get_version(root) >= version

    def mark_initialized(self, root: Path, version: int) -> None:
        data = self._load()
        key = self._key(root)
        if data.get(key, 0) >= version:
            return
        data[key] = version
        self._save(data)
        logger.debug(f"Recorded {key} as initialized (version {version})")

    def reset(self, root: Path) -> bool:
        """Forget the record for root; returns whether one existed."""
        data = self._load()
        if data.pop(self._key(root), None) is None:
            return False
        self._save(data)
        logger.info("Initialization state reset")
        return True
