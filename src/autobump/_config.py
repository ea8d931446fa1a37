"""Bump a project's semantic version based on the commits of a GitHub push.

Meant to be run as a step of a GitHub Actions workflow. The action inputs
(e.g. INPUT_MAJOR-WORDING) and the GITHUB_* variables are read from the
environment.

Examples:
    # Bump the version in package.json / composer.json (if the commit
    # messages ask for it), commit the change, tag it and push.
    autobump bump

    # Same as above, but only log the new version.
    autobump bump --dry-run

    # Print internal autobump information to STDOUT as JSON data.
    autobump info
"""

# NOTE: The above docstring is used by clack for the command-line --help
#   message. This module is used to define clack configuration classes and the
#   clack parser function.
from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional, Sequence

import clack


BumpCommand = Literal["bump"]
InfoCommand = Literal["info"]
Command = Literal[BumpCommand, InfoCommand]  # available CLI sub-commands


class Config(clack.Config):
    """Base configuration class."""

    command: Command

    # --- OPTIONS
    event_path: Optional[Path] = None
    version_file: Optional[Path] = None
    workspace: Optional[Path] = None


class BumpConfig(Config):
    """Config for the 'bump' subcommand."""

    command: BumpCommand

    # --- OPTIONS
    dry_run: bool = False


class InfoConfig(Config):
    """Config for the 'info' subcommand."""

    command: InfoCommand


def clack_parser(argv: Sequence[str]) -> dict[str, Any]:
    """Parses autobump's command-line arguments."""
    parser = clack.Parser()
    parser.add_argument(
        "--event-path",
        type=Path,
        help=(
            "Path to the JSON payload of the triggering event. Defaults to"
            " the value of the GITHUB_EVENT_PATH environment variable."
        ),
    )
    parser.add_argument(
        "--version-file",
        type=Path,
        help=(
            "Path to the JSON manifest which holds the project version."
            " Defaults to the VERSION_FILE action input or, if that is not"
            " set, to composer.json / package.json (in that order)."
        ),
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help=(
            "The directory to search for a manifest file in. Defaults to the"
            " value of the GITHUB_WORKSPACE environment variable."
        ),
    )

    new_command = clack.new_command_factory(parser)

    ### setup the 'bump' subcommand...
    bump_parser = new_command(
        "bump",
        help=(
            "Bump the project version (if the commit messages call for it),"
            " then commit, tag and push the change."
        ),
    )
    bump_parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help=(
            "Compute the new version but do NOT write it or run any git"
            " commands."
        ),
    )

    ### setup the 'info' subcommand...
    new_command(
        "info", help="Print internal state to standard output as JSON."
    )

    args = parser.parse_args(argv[1:])
    kwargs = clack.filter_cli_args(args)

    return kwargs
