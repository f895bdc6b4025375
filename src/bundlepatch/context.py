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


from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field

from bundlepatch.constants import (
    CURRENT_INIT_VERSION,
    DEFAULT_OLD_PREFIX,
    INIT_STATE_FILE,
)
from bundlepatch.core.exceptions import new_prefix_missing
from bundlepatch.core.patching.models import PathPrefix
from bundlepatch.core.state.state_store import InitStateStore


class GlobalConfig(BaseModel):
    old_prefix: str = Field(
        default=DEFAULT_OLD_PREFIX,
        description="Path prefix hardcoded in the bundle",
    )
    new_prefix: str | None = Field(
        default=None,
        description="Path prefix the bundle is installed under",
    )
    verbose: bool = Field(default=False, description="Enable verbose logging output")
    silent: bool = Field(
        default=False, description="Do not output any log text to the console"
    )
    force: bool = Field(
        default=False,
        description="Patch even if the bundle is already marked as initialized",
    )


@dataclass(frozen=True)
class GlobalContext:
    old_prefix: str
    new_prefix: str | None
    verbose: bool
    silent: bool
    force: bool
    state_store: InitStateStore

    @classmethod
    def from_global_config(cls, config: GlobalConfig, state_file: Path | None = None):
        state_store = InitStateStore(state_file or INIT_STATE_FILE)

        return GlobalContext(
            config.old_prefix,
            config.new_prefix,
            config.verbose,
            config.silent,
            config.force,
            state_store,
        )

    def prefix(self) -> PathPrefix:
        if self.new_prefix is None:
            raise new_prefix_missing()
        return PathPrefix(self.old_prefix, self.new_prefix)


@dataclass(frozen=True)
class PatchContext:
    root: Path
    prefix: PathPrefix
    version: int = CURRENT_INIT_VERSION
    force: bool = False
