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
from colorama import init
from dotenv import load_dotenv
from loguru import logger

from bundlepatch.commands import config, patch, state
from bundlepatch.constants import (
    APP_NAME,
    ENV_APP_PREFIX,
    GLOBAL_CONFIG_FILE,
    LOCAL_CONFIG_FILE,
)
from bundlepatch.context import GlobalConfig, GlobalContext
from bundlepatch.core.config.config_loader import ConfigLoader
from bundlepatch.core.exceptions import handle_bundlepatch_exception
from bundlepatch.core.logging.logging import setup_logger
from bundlepatch.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    setup_signal_handlers,
    version_callback,
)

# Initialize colorama (colored output in terminal)
init(autoreset=True)

# main cli app
app = typer.Typer(
    help=f"{APP_NAME}: relocate a prebuilt bundle to a new install prefix",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

app.command(name="patch")(patch.main)
app.command(name="status")(state.status)
app.command(name="reset")(state.reset)
app.command(name="config")(config.main)

# which commands do not require a global context
no_context_commands = {"config"}


def load_global_config(custom_config_path: str | None, **input_args):
    # input args are the "runtime overrides" for configs
    config_args = {}

    for key, item in input_args.items():
        if item is not None:
            config_args[key] = item

    return ConfigLoader.get_full_config(
        GlobalConfig,
        config_args,
        LOCAL_CONFIG_FILE,
        ENV_APP_PREFIX,
        GLOBAL_CONFIG_FILE,
        Path(custom_config_path) if custom_config_path is not None else None,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        "-LD",
        callback=get_log_dir_callback,
        is_eager=True,
        help="Show log path (where logs for bundlepatch live) and exit",
    ),
    custom_config: str | None = typer.Option(
        None,
        "--custom-config",
        help="Path to a custom config file",
    ),
    state_file: Path | None = typer.Option(
        None,
        "--state-file",
        help="Where to keep the record of initialized bundles",
    ),
    old_prefix: str | None = typer.Option(
        None,
        "--old-prefix",
        help="Path prefix hardcoded in the bundle.",
    ),
    new_prefix: str | None = typer.Option(
        None,
        "--new-prefix",
        help="Path prefix the bundle is installed under.",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    silent: bool | None = typer.Option(
        None,
        "--silent",
        "-s",
        help="Do not output any log text to the console.",
    ),
    force: bool | None = typer.Option(
        None,
        "--force",
        "-f",
        help="Patch even if the bundle is already marked as initialized.",
    ),
) -> None:
    """
    Global setup callback. Initialize global context/config used by commands
    """
    with handle_bundlepatch_exception(exit_on_fail=True):
        if ctx.invoked_subcommand is None:
            print(ctx.get_help())
            raise typer.Exit()

        # initial setup of logger, will be updated once config is known
        setup_logger(
            ctx.invoked_subcommand, debug=verbose or False, silent=silent or False
        )

        if ctx.invoked_subcommand in no_context_commands:
            return

        global_config, used_config_sources, _ = load_global_config(
            custom_config,
            old_prefix=old_prefix,
            new_prefix=new_prefix,
            verbose=verbose,
            silent=silent,
            force=force,
        )

        setup_logger(
            ctx.invoked_subcommand,
            debug=global_config.verbose,
            silent=global_config.silent,
        )

        logger.debug(f"Used {used_config_sources} to build global context.")
        ctx.obj = GlobalContext.from_global_config(global_config, state_file)


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8
    ensure_utf8_output()
    # Set up signal handlers for graceful shutdown
    setup_signal_handlers()
    # load any .env files (config values possibly set through env)
    load_dotenv()
    # launch cli
    app(prog_name=APP_NAME)


if __name__ == "__main__":
    run_app()
