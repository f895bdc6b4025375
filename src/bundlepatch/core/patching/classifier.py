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

from loguru import logger

from bundlepatch.constants import ELF_MAGIC, SHEBANG, TEXT_EXTENSIONS
from bundlepatch.core.patching.models import FileKind, FileRecord


class FileClassifier:
    """
    Sorts bundle files into text artifacts, ELF objects, or neither.

    The leading bytes are read once per file. ELF content always wins, so a
    shared object named like a config file is never rewritten as text.
    """

    def __init__(self, text_extensions: frozenset[str] = TEXT_EXTENSIONS):
        self.text_extensions = text_extensions

    def classify(self, path: Path) -> FileKind:
        try:
            with open(path, "rb") as f:
                header = f.read(len(ELF_MAGIC))
        except OSError as e:
            logger.debug(f"Cannot read {path} for classification: {e}")
            return FileKind.UNKNOWN

        if header == ELF_MAGIC:
            return FileKind.OBJECT_BINARY

        if path.suffix in self.text_extensions:
            return FileKind.TEXT

        if header[: len(SHEBANG)] == SHEBANG:
            return FileKind.TEXT

        return FileKind.UNKNOWN

    def record(self, path: Path) -> FileRecord:
        return FileRecord(path, self.classify(path))
