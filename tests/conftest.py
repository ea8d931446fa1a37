"""This file contains shared fixtures and pytest hooks.

https://docs.pytest.org/en/6.2.x/fixture.html#conftest-py-sharing-fixtures-across-multiple-files
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterable, List, Tuple

from eris import ErisError, Err, Ok, Result
from pytest import fixture

from autobump._settings import ActionSettings


MakeSettings = Callable[..., ActionSettings]

DEFAULT_SETTINGS = {
    "major_words": ("major", "breaking change"),
    "minor_words": ("feat", "minor"),
    "rc_words": ("pre-alpha", "pre-beta", "pre-rc"),
    "github_ref": "refs/heads/main",
    "github_actor": "octocat",
    "github_token": "s3cr3t",
    "github_repository": "octocat/hello-world",
}


class FakeGit:
    """Records every git command instead of running it."""

    def __init__(self, fail_on: Iterable[Tuple[str, ...]] = ()) -> None:
        self.calls: List[Tuple[str, ...]] = []
        self.fail_on = list(fail_on)

    def __call__(self, *args: str) -> Result[str, ErisError]:
        self.calls.append(args)
        if args in self.fail_on:
            return Err(f"git {' '.join(args)} failed")
        return Ok("")


@fixture(name="manifest_file")
def manifest_file_fixture(tmp_path: Path) -> Path:
    """Returns the path to a package.json file holding version 1.2.3."""
    result = tmp_path / "package.json"
    result.write_text(
        json.dumps({"name": "x", "version": "1.2.3"}, indent=2)
    )
    return result


@fixture(name="make_settings")
def make_settings_fixture(manifest_file: Path) -> MakeSettings:
    """Returns a factory for ActionSettings objects with sane defaults."""

    def make_settings(**kwargs: Any) -> ActionSettings:
        fields = dict(DEFAULT_SETTINGS, version_file=manifest_file)
        fields.update(kwargs)
        return ActionSettings(**fields)

    return make_settings


@fixture(name="git")
def git_fixture() -> FakeGit:
    """A git runner that never fails."""
    return FakeGit()


@fixture(name="make_git")
def make_git_fixture() -> Callable[..., FakeGit]:
    """Returns a factory for git runners that fail on the given commands."""
    return FakeGit
