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

from platformdirs import user_config_dir, user_log_path

APP_NAME = "bundlepatch"
ENV_APP_PREFIX = APP_NAME.upper() + "_"
LOG_DIR = Path(user_log_path(appname=APP_NAME))

CONFIG_FILENAME = "bundlepatch.toml"

GLOBAL_CONFIG_FILE = Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME
LOCAL_CONFIG_FILE = Path(CONFIG_FILENAME)

# first-run bookkeeping, one entry per bundle root
INIT_STATE_FILE = Path(user_config_dir(APP_NAME)) / "init_state.json"
CURRENT_INIT_VERSION = 1

# prefix baked into the upstream bootstrap archives
DEFAULT_OLD_PREFIX = "/data/data/com.termux"

TEXT_EXTENSIONS = frozenset(
    {
        ".sh",
        ".py",
        ".pl",
        ".rb",
        ".lua",
        ".conf",
        ".cfg",
        ".txt",
        ".json",
        ".xml",
        ".pc",
        ".la",
        ".cmake",
        ".m4",
    }
)

SHEBANG = b"#!"
ELF_MAGIC = b"\x7fELF"
