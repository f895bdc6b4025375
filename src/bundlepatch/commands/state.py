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
from colorama import Fore, Style

from bundlepatch.constants import CURRENT_INIT_VERSION
from bundlepatch.context import GlobalContext
from bundlepatch.core.exceptions import handle_bundlepatch_exception


def status(
    ctx: typer.Context,
    root: Path = typer.Argument(..., help="Root directory of the bundle."),
) -> None:
    """Show whether the bundle under ROOT has already been relocated."""
    global_context: GlobalContext = ctx.obj

    with handle_bundlepatch_exception(exit_on_fail=True):
        version = global_context.state_store.get_version(root)

    if version >= CURRENT_INIT_VERSION:
        print(
            f"{Fore.GREEN}Initialized{Style.RESET_ALL} (version {version}): {root}"
        )
    else:
        print(f"{Fore.YELLOW}Not initialized{Style.RESET_ALL}: {root}")


def reset(
    ctx: typer.Context,
    root: Path = typer.Argument(..., help="Root directory of the bundle."),
) -> None:
    """Forget that ROOT was relocated so the next 'patch' runs again."""
    global_context: GlobalContext = ctx.obj

    with handle_bundlepatch_exception(exit_on_fail=True):
        removed = global_context.state_store.reset(root)

    if removed:
        print(f"{Fore.GREEN}Reset initialization state for {root}{Style.RESET_ALL}")
    else:
        print(f"No initialization state recorded for {root}")
