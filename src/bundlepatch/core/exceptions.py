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


"""
Custom exception hierarchy for the bundlepatch CLI application.

This module defines the exceptions raised while relocating a bundle,
plus a small context manager that turns them into clean CLI exits.
"""

import contextlib

import typer
from colorama import Fore, Style
from loguru import logger


class BundlePatchError(Exception):
    """
    Base exception for all bundlepatch-related errors.

    All bundlepatch-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str | None = None):
        """
        Initialize a BundlePatchError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(BundlePatchError):
    """
    Input validation errors.

    Raised when user input fails validation checks,
    such as an empty prefix or a missing replacement prefix.
    """

    pass


class ConfigurationError(BundlePatchError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


class FileSystemError(BundlePatchError):
    """
    File system operation errors.

    Raised when file or directory operations fail,
    such as permission issues or missing files.
    """

    pass


class DirectoryMissingError(FileSystemError):
    """Raised when the bundle root to patch does not exist."""

    pass


class FileReadError(FileSystemError):
    """Raised when a file cannot be read or decoded."""

    pass


class FileWriteError(FileSystemError):
    """Raised when a patched file cannot be written back."""

    pass


class StateError(BundlePatchError):
    """
    Errors related to the first-run state store.

    Raised when the initialized-version record cannot be persisted.
    """

    pass


# Convenience functions for creating common errors
def directory_missing(path: str) -> DirectoryMissingError:
    """Create a DirectoryMissingError for a bundle root that is not there."""
    return DirectoryMissingError(
        f"Bundle directory does not exist: {path}",
        "Extract the bundle before patching, or check the path argument",
    )


def empty_prefix() -> ValidationError:
    """Create a ValidationError for an empty old prefix."""
    return ValidationError(
        "The prefix to replace must not be empty",
        "Set old_prefix via --old-prefix, the config file or BUNDLEPATCH_OLD_PREFIX",
    )


def nul_in_prefix() -> ValidationError:
    """Create a ValidationError for a prefix that contains a NUL byte."""
    return ValidationError(
        "Prefixes must not contain NUL bytes",
        "A filesystem path never contains \\x00; check --old-prefix and --new-prefix",
    )


def new_prefix_missing() -> ValidationError:
    """Create a ValidationError for when no replacement prefix is configured."""
    return ValidationError(
        "No replacement prefix configured",
        "Set new_prefix via --new-prefix, the config file or BUNDLEPATCH_NEW_PREFIX",
    )


@contextlib.contextmanager
def handle_bundlepatch_exception(exit_on_fail: bool = True):
    """
    Report errors raised inside the block and optionally exit with code 1.

    typer.Exit is always passed through untouched.
    """
    try:
        yield
    except typer.Exit:
        raise
    except BundlePatchError as e:
        print(f"{Fore.RED}Error:{Style.RESET_ALL} {e.message}")
        if e.details:
            logger.debug(f"Details: {e.details}")
        if exit_on_fail:
            raise typer.Exit(1)
        raise
    except Exception as e:
        print(f"{Fore.RED}Unexpected error:{Style.RESET_ALL} {e}")
        logger.exception("Unexpected error")
        if exit_on_fail:
            raise typer.Exit(1)
        raise
