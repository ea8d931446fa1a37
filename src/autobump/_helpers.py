"""Utility functions."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from eris import ErisError, Err, Ok, Result
from logrus import Logger
from typist import PathLike

from ._constants import MANIFEST_CANDIDATES
from ._version import dump_manifest


logger = Logger(__name__)


class TextFile(Protocol):
    """Anything we can read a manifest from and write it back to.

    pathlib.Path objects satisfy this protocol.
    """

    def read_text(self) -> str:
        """Returns the file's contents."""

    def write_text(self, data: str) -> Any:
        """Replaces the file's contents with @data."""


def locate_version_file(workspace: PathLike) -> Result[Path, ErisError]:
    """Finds the manifest file which holds the project version.

    If more than one candidate exists, the last one listed in
    MANIFEST_CANDIDATES is used (i.e. composer.json beats package.json).
    """
    workspace = Path(workspace)
    logger.info(
        "VERSION_FILE not set... trying to detect which file we should get"
        " the initial version from."
    )

    result: Optional[Path] = None
    for name in MANIFEST_CANDIDATES:
        path = workspace / name
        if path.exists():
            result = path

    if result is None:
        return Err(
            f"None of the following files exist in {str(workspace)!r}:"
            f" {list(MANIFEST_CANDIDATES)!r}"
        )

    logger.info("Using %s", result)
    return Ok(result)


def read_event(
    event_path: Optional[PathLike],
) -> Result[Dict[str, Any], ErisError]:
    """Loads the JSON payload of the event which triggered this workflow."""
    if event_path is None:
        logger.warning("No event payload available.")
        return Ok({})

    try:
        event = json.loads(Path(event_path).read_text())
    except (OSError, ValueError) as e:
        return Err(f"Unable to load the event payload from {event_path}: {e}")

    if not isinstance(event, dict):
        return Err(f"The event payload in {event_path} is not a JSON object.")
    return Ok(event)


def get_commit_messages(event: Dict[str, Any]) -> List[str]:
    """Returns the lower-cased commit messages carried by @event."""
    commits = event.get("commits") or []
    return [
        str(commit.get("message", "")).lower()
        for commit in commits
        if isinstance(commit, dict)
    ]


def read_manifest(
    manifest_file: TextFile,
) -> Result[Dict[str, Any], ErisError]:
    """Parses the JSON manifest stored in @manifest_file."""
    try:
        manifest = json.loads(manifest_file.read_text())
    except (OSError, ValueError) as e:
        return Err(f"Unable to load the manifest file {manifest_file}: {e}")

    if not isinstance(manifest, dict):
        return Err(f"The manifest file {manifest_file} is not a JSON object.")
    return Ok(manifest)


def write_manifest(
    manifest_file: TextFile, manifest: Dict[str, Any]
) -> Result[None, ErisError]:
    """Serializes @manifest back to @manifest_file."""
    try:
        manifest_file.write_text(dump_manifest(manifest))
    except OSError as e:
        return Err(f"Unable to write the manifest file {manifest_file}: {e}")
    return Ok(None)
