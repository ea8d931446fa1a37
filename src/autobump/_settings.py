"""Contains the ActionSettings class definition.

The GitHub Actions runner hands its inputs to us via environment variables.
These settings are read exactly once (see ActionSettings.from_env) and then
passed explicitly to every function that needs them.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, cast

from eris import ErisError, Err, Ok, Result
from pydantic.dataclasses import dataclass
from typist import literal_to_list

from ._bump import BumpPart
from ._constants import DEFAULT_GIT_EMAIL, DEFAULT_GIT_USER, MASK
from ._helpers import locate_version_file


REQUIRED_WORDINGS: Tuple[str, ...] = (
    "MAJOR-WORDING",
    "MINOR-WORDING",
    "RC-WORDING",
)


@dataclass(frozen=True)
class ActionSettings:
    """Everything the bump action needs to know about its environment."""

    version_file: Path
    major_words: Tuple[str, ...]
    minor_words: Tuple[str, ...]
    rc_words: Tuple[str, ...]
    patch_words: Tuple[str, ...] = ()
    default: BumpPart = "patch"
    tag_prefix: str = ""
    skip_tag: bool = False
    git_user: str = DEFAULT_GIT_USER
    git_email: str = DEFAULT_GIT_EMAIL
    github_ref: Optional[str] = None
    github_head_ref: Optional[str] = None
    github_actor: Optional[str] = None
    github_token: Optional[str] = None
    github_repository: Optional[str] = None
    event_path: Optional[Path] = None
    workspace: Optional[Path] = None

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        *,
        version_file: Optional[Path] = None,
        event_path: Optional[Path] = None,
        workspace: Optional[Path] = None,
    ) -> Result["ActionSettings", ErisError]:
        """Builds a new ActionSettings object from environment variables.

        Arguments:
            @env: The environment to read from. Defaults to os.environ.
            @version_file, @event_path, @workspace: Explicit values which take
                precedence over their environment variable counterparts.

        Returns:
            Ok(settings) if the environment describes a valid configuration.
                OR
            Err(ErisError), otherwise.
        """
        if env is None:
            env = os.environ

        missing = [
            name for name in REQUIRED_WORDINGS if get_input(env, name) is None
        ]
        if missing:
            return Err(
                "The following keyword lists must be configured:"
                f" {missing!r}"
            )

        default = (get_input(env, "DEFAULT") or "patch").lower()
        choices = literal_to_list(BumpPart)
        if default not in choices:
            return Err(
                f"Invalid DEFAULT bump part ({default!r}). Choose from one of"
                f" {choices}."
            )

        if workspace is None and env.get("GITHUB_WORKSPACE"):
            workspace = Path(env["GITHUB_WORKSPACE"])

        if version_file is None:
            raw_version_file = get_input(env, "VERSION_FILE")
            if raw_version_file:
                # Relative paths are relative to the workspace, not the cwd.
                version_file = (workspace or Path.cwd()) / raw_version_file
            else:
                version_file_r = locate_version_file(
                    workspace or Path.cwd()
                )
                if isinstance(version_file_r, Err):
                    err: Err[Any, ErisError] = Err(
                        "VERSION_FILE is not set and no manifest file could"
                        " be detected."
                    )
                    return err.chain(version_file_r)
                version_file = version_file_r.ok()

        if event_path is None and env.get("GITHUB_EVENT_PATH"):
            event_path = Path(env["GITHUB_EVENT_PATH"])

        return Ok(
            cls(
                version_file=version_file,
                major_words=split_words(get_input(env, "MAJOR-WORDING")),
                minor_words=split_words(get_input(env, "MINOR-WORDING")),
                rc_words=split_words(get_input(env, "RC-WORDING")),
                patch_words=split_words(get_input(env, "PATCH-WORDING")),
                default=cast(BumpPart, default),
                tag_prefix=get_input(env, "TAG-PREFIX") or "",
                skip_tag=get_input(env, "SKIP-TAG") == "true",
                git_user=env.get("GITHUB_USER") or DEFAULT_GIT_USER,
                git_email=env.get("GITHUB_EMAIL") or DEFAULT_GIT_EMAIL,
                github_ref=env.get("GITHUB_REF") or None,
                github_head_ref=env.get("GITHUB_HEAD_REF") or None,
                github_actor=env.get("GITHUB_ACTOR") or None,
                github_token=env.get("GITHUB_TOKEN") or None,
                github_repository=env.get("GITHUB_REPOSITORY") or None,
                event_path=event_path,
                workspace=workspace,
            )
        )

    def to_json(self) -> Dict[str, Any]:
        """Returns a JSON-friendly dict with any secrets masked."""
        result: Dict[str, Any] = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if isinstance(value, Path):
                value = str(value)
            elif isinstance(value, tuple):
                value = list(value)
            result[name] = value

        if result["github_token"] is not None:
            result["github_token"] = MASK
        return result


def get_input(env: Mapping[str, str], name: str) -> Optional[str]:
    """Returns the value of an action input (e.g. INPUT_MAJOR-WORDING).

    Falls back to the bare variable name when the runner did not prefix it.
    """
    for key in (f"INPUT_{name.upper()}", name.upper()):
        if key in env:
            return env[key]
    return None


def split_words(value: Optional[str]) -> Tuple[str, ...]:
    """Parses a comma-separated keyword list.

    Entries are case-folded but otherwise kept as they are, empty ones
    included. Unset lists yield an empty tuple.
    """
    if value is None:
        return ()
    return tuple(word.lower() for word in value.split(","))
