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
import tomllib
from pathlib import Path
from textwrap import shorten
from typing import Any

import typer
from colorama import Fore, Style

from bundlepatch.constants import (
    ENV_APP_PREFIX,
    GLOBAL_CONFIG_FILE,
    LOCAL_CONFIG_FILE,
)
from bundlepatch.context import GlobalConfig

SCOPES = ("local", "global", "env")


def display_config(data: list[dict], max_value_length: int = 50) -> None:
    """
    Display config data in a two-line format:
    Key: Description
      Value (Source)
    """
    for item in data:
        value_display = shorten(
            str(item["Value"]), width=max_value_length, placeholder="..."
        )

        print(
            f"{Fore.CYAN}{Style.BRIGHT}{item['Key']}{Style.RESET_ALL}: "
            f"{Fore.WHITE}{item['Description']}{Style.RESET_ALL}"
        )
        print(
            f"  {Fore.GREEN}{value_display}{Style.RESET_ALL} "
            f"{Fore.YELLOW}({item['Source']}){Style.RESET_ALL}"
        )
        print()


def _get_config_schema() -> dict[str, dict[str, Any]]:
    """Get the schema of available config options from GlobalConfig."""
    schema = {}

    for field_name, field_info in GlobalConfig.model_fields.items():
        schema[field_name] = {
            "description": field_info.description or "No description available",
            "default": field_info.default,
            "type": field_info.annotation,
        }

    return schema


def _check_key_exists(key: str) -> dict:
    """Check if a config key exists. If not, show available options and exit."""
    schema = _get_config_schema()

    if key not in schema:
        print(f"{Fore.RED}Error:{Style.RESET_ALL} Unknown configuration key '{key}'\n")
        print(
            f"{Fore.WHITE}{Style.BRIGHT}Available configuration options:{Style.RESET_ALL}\n"
        )
        display_config(
            [
                {
                    "Key": config_key,
                    "Description": info["description"],
                    "Value": info["default"],
                    "Source": "Default",
                }
                for config_key, info in sorted(schema.items())
            ],
            max_value_length=80,
        )
        raise typer.Exit(1)

    return schema[key]


def _read_toml(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"Failed to parse existing config {path}: {e}")
        return {}


def _convert_value(value: str, target_type) -> Any:
    # CLI inputs are strings, TOML keeps booleans typed
    if target_type is bool:
        if value.lower() in ("true", "1", "yes", "on"):
            return True
        if value.lower() in ("false", "0", "no", "off"):
            return False
        print(f"{Fore.RED}Error:{Style.RESET_ALL} '{value}' is not a boolean")
        raise typer.Exit(1)
    return value


def _write_toml(path: Path, data: dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for k, v in data.items():
            if isinstance(v, bool):
                f.write(f"{k} = {str(v).lower()}\n")
            elif isinstance(v, (int, float)):
                f.write(f"{k} = {v}\n")
            else:
                escaped = str(v).replace("\\", "\\\\").replace('"', '\\"')
                f.write(f'{k} = "{escaped}"\n')


def set_config(key: str, value: str, scope: str) -> None:
    """Set a configuration value in the specified scope."""
    field_info = _check_key_exists(key)

    if scope == "env":
        env_var = f"{ENV_APP_PREFIX}{key.upper()}"
        print(f"{Fore.GREEN}To set this as an environment variable:{Style.RESET_ALL}")
        print(f"  Windows (PowerShell): $env:{env_var}='{value}'")
        print(f"  Windows (CMD): set {env_var}={value}")
        print(f"  Linux/macOS: export {env_var}='{value}'")
        return

    if scope == "global":
        config_path = GLOBAL_CONFIG_FILE
        config_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        config_path = LOCAL_CONFIG_FILE

    config_data = _read_toml(config_path)
    final_value = _convert_value(value, field_info["type"])
    config_data[key] = final_value
    _write_toml(config_path, config_data)

    print(f"{Fore.GREEN}Set {key} = {final_value} ({scope}){Style.RESET_ALL}")
    print(f"Config file: {config_path.absolute()}")


def get_config(key: str | None, scope: str | None) -> None:
    """Get configuration value(s) from the specified scope or all scopes."""
    schema = _get_config_schema()

    if key is not None:
        _check_key_exists(key)

    # display priority: Local > Env > Global
    sources = []
    if scope is None or scope == "local":
        sources.append(("Local Config", _read_toml(LOCAL_CONFIG_FILE)))
    if scope is None or scope == "env":
        env_config = {
            k[len(ENV_APP_PREFIX) :].lower(): v
            for k, v in os.environ.items()
            if k.upper().startswith(ENV_APP_PREFIX)
        }
        sources.append(("Environment", env_config))
    if scope is None or scope == "global":
        sources.append(("Global Config", _read_toml(GLOBAL_CONFIG_FILE)))

    keys = [key] if key is not None else sorted(schema.keys())
    table_data = []
    for k in keys:
        value, source = schema[k]["default"], "Default"
        for source_name, config_data in sources:
            if k in config_data:
                value, source = config_data[k], source_name
                break

        table_data.append(
            {
                "Key": k,
                "Description": schema[k]["description"],
                "Value": "None" if value is None else value,
                "Source": source,
            }
        )

    display_config(table_data)


def main(
    key: str | None = typer.Argument(None, help="Configuration key to get or set."),
    value: str | None = typer.Argument(
        None, help="Value to set (omit to get current value)."
    ),
    scope: str | None = typer.Option(
        None,
        "--scope",
        help="Select which scope to modify. Defaults to local for setting, all for getting.",
    ),
) -> None:
    """
    Manage global and local bundlepatch configurations.

    Priority order: program arguments > custom config > local config > environment variables > global config

    Examples:
        # Show all configuration
        bundlepatch config

        # Set the prefix the bundle should point at
        bundlepatch config new_prefix /data/data/com.example

        # Set a global configuration value
        bundlepatch config old_prefix /data/data/com.termux --scope global
    """
    if scope is not None and scope not in SCOPES:
        print(
            f"{Fore.RED}Error:{Style.RESET_ALL} Scope must be one of: {', '.join(SCOPES)}"
        )
        raise typer.Exit(1)

    if value is not None:
        if key is None:
            print(
                f"{Fore.RED}Error:{Style.RESET_ALL} Key is required when setting a value"
            )
            raise typer.Exit(1)
        set_config(key, value, scope or "local")
    else:
        get_config(key, scope)

