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

from loguru import logger


def list_files(root: Path) -> list[Path]:
    """
    Recursively collect every readable regular file under root.

    Directories, symlinks and unreadable entries are left out. The listing is
    fully materialized and sorted before any file is touched.
    """

    def _on_error(error: OSError):
        logger.debug(f"Skipping unreadable directory {error.filename}: {error}")

    files = []
    for dirpath, _, filenames in os.walk(root, onerror=_on_error, followlinks=False):
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.is_symlink() or not path.is_file():
                continue
            if not os.access(path, os.R_OK):
                logger.debug(f"Skipping unreadable file {path}")
                continue
            files.append(path)

    files.sort()
    return files
