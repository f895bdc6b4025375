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

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from bundlepatch.context import GlobalContext, PatchContext
from bundlepatch.core.exceptions import handle_bundlepatch_exception
from bundlepatch.core.patching.models import ScanReport
from bundlepatch.pipelines.patch_pipeline import PatchPipeline

console = Console()


def display_report(report: ScanReport, show_all: bool = False) -> None:
    """Print the summary line and a table of the files worth looking at."""
    console.print(
        f"[bold]Scanned[/bold] {report.files_scanned}  "
        f"[green]patched[/green] {report.files_patched}  "
        f"[red]failed[/red] {report.files_failed}  "
        f"[dim]skipped[/dim] {report.files_skipped}"
    )

    rows = [
        o
        for o in report.outcomes
        if show_all or o.changed or o.failed or o.skipped
    ]
    if not rows:
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("File", style="cyan", overflow="fold")
    table.add_column("Kind")
    table.add_column("Result")
    table.add_column("Sites", justify="right")

    for outcome in rows:
        result = outcome.reason.value
        if outcome.error:
            result = f"{result}: {outcome.error}"
        sites = str(outcome.occurrences)
        if outcome.skipped:
            sites = f"{sites} (+{outcome.skipped} skipped)"
        table.add_row(str(outcome.path), outcome.kind.value, result, sites)

    console.print(table)


def main(
    ctx: typer.Context,
    root: Path = typer.Argument(
        ...,
        help="Root directory of the extracted bundle to relocate.",
    ),
    show_all: bool = typer.Option(
        False,
        "--all",
        help="List every checked file in the report, not only the changed ones.",
    ),
) -> None:
    """Rewrite the hardcoded prefix in every script and ELF object under ROOT.

    Examples:
        # Relocate a bootstrap to a new package path
        bundlepatch --new-prefix /data/data/com.example patch ./usr

        # Patch again even though the bundle was already initialized
        bundlepatch --force patch ./usr
    """
    global_context: GlobalContext = ctx.obj

    with handle_bundlepatch_exception(exit_on_fail=True):
        patch_context = PatchContext(
            root=root,
            prefix=global_context.prefix(),
            force=global_context.force,
        )

        logger.debug(
            "Patch command started: root={root} old={old} new={new}",
            root=root,
            old=patch_context.prefix.old,
            new=patch_context.prefix.new,
        )

        pipeline = PatchPipeline(patch_context, global_context.state_store)
        report = pipeline.run()

        if report is None:
            logger.info("Bundle already initialized, nothing to do (use --force)")
            return

        if not global_context.silent:
            display_report(report, show_all=show_all)

        if not report.success:
            raise typer.Exit(1)
