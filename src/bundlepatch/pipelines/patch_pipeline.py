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


from loguru import logger

from bundlepatch.context import PatchContext
from bundlepatch.core.logging.utils import log_report, time_block
from bundlepatch.core.patching.models import ScanReport
from bundlepatch.core.patching.orchestrator import PatchOrchestrator
from bundlepatch.core.state.state_store import InitStateStore


class PatchPipeline:
    """
    First-run relocation of a bundle: checks the init gate, patches, and
    records the bundle as initialized when nothing failed.
    """

    def __init__(
        self,
        patch_context: PatchContext,
        state_store: InitStateStore,
        orchestrator: PatchOrchestrator | None = None,
    ):
        self.patch_context = patch_context
        self.state_store = state_store
        self.orchestrator = orchestrator or PatchOrchestrator()

    def should_run(self) -> bool:
        if self.patch_context.force:
            return True

        stored = self.state_store.get_version(self.patch_context.root)
        if stored >= self.patch_context.version:
            logger.debug(f"Bundle already initialized (version {stored})")
            return False

        return True

    def run(self) -> ScanReport | None:
        """Returns None when the gate says the bundle is already patched."""
        if not self.should_run():
            return None

        logger.info(f"Initializing bundle at {self.patch_context.root}")

        with time_block("Patch all files"):
            report = self.orchestrator.patch_all(
                self.patch_context.root, self.patch_context.prefix
            )

        log_report("Patch run", report)

        if report.success:
            self.state_store.mark_initialized(
                self.patch_context.root, self.patch_context.version
            )
        else:
            logger.error(
                f"{report.files_failed} files failed to patch, bundle not marked as initialized"
            )

        unpatchable = report.unpatchable()
        if unpatchable:
            logger.warning(
                f"{len(unpatchable)} object files still reference {self.patch_context.prefix.old} "
                "and may fail at runtime"
            )

        return report
