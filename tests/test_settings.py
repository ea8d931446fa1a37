"""Tests for reading the action configuration from the environment."""

from __future__ import annotations

from pathlib import Path

from eris import Err
from pytest import mark, param

from autobump._helpers import locate_version_file
from autobump._settings import ActionSettings, get_input, split_words


params = mark.parametrize

ENV = {
    "INPUT_MAJOR-WORDING": "MAJOR,Breaking Change",
    "INPUT_MINOR-WORDING": "feat,minor",
    "INPUT_RC-WORDING": "pre-alpha,pre-beta",
    "INPUT_TAG-PREFIX": "v",
    "GITHUB_REF": "refs/heads/main",
    "GITHUB_ACTOR": "octocat",
    "GITHUB_TOKEN": "s3cr3t",
    "GITHUB_REPOSITORY": "octocat/hello-world",
}


def test_from_env(tmp_path: Path) -> None:
    """Test the happy path."""
    (tmp_path / "package.json").write_text('{"version": "1.0.0"}')
    env = dict(ENV, GITHUB_WORKSPACE=str(tmp_path))

    settings = ActionSettings.from_env(env).unwrap()

    assert settings.version_file == tmp_path / "package.json"
    assert settings.major_words == ("major", "breaking change")
    assert settings.patch_words == ()
    assert settings.default == "patch"
    assert settings.tag_prefix == "v"
    assert settings.skip_tag is False
    assert settings.git_user == "Automated Version Bump"


def test_from_env_overrides(tmp_path: Path) -> None:
    """Explicit arguments beat the environment."""
    version_file = tmp_path / "custom.json"
    env = dict(
        ENV,
        VERSION_FILE="ignored.json",
        GITHUB_EVENT_PATH="ignored-event.json",
        **{"INPUT_SKIP-TAG": "true", "INPUT_DEFAULT": "Minor"},
    )

    settings = ActionSettings.from_env(
        env,
        version_file=version_file,
        event_path=tmp_path / "event.json",
    ).unwrap()

    assert settings.version_file == version_file
    assert settings.event_path == tmp_path / "event.json"
    assert settings.skip_tag is True
    assert settings.default == "minor"


@params("name", ["MAJOR-WORDING", "MINOR-WORDING", "RC-WORDING"])
def test_from_env_missing_wording(name: str) -> None:
    """Every keyword list except the patch one is required."""
    env = dict(ENV, VERSION_FILE="package.json")
    del env[f"INPUT_{name}"]
    assert isinstance(ActionSettings.from_env(env), Err)


def test_from_env_bad_default() -> None:
    """The default bump part must be a known part."""
    env = dict(ENV, VERSION_FILE="package.json", INPUT_DEFAULT="huge")
    assert isinstance(ActionSettings.from_env(env), Err)


def test_from_env_no_manifest(tmp_path: Path) -> None:
    """Test that a missing manifest is a configuration error."""
    env = dict(ENV, GITHUB_WORKSPACE=str(tmp_path))
    assert isinstance(ActionSettings.from_env(env), Err)


def test_to_json_masks_token(tmp_path: Path) -> None:
    """The access token must never be printed."""
    env = dict(ENV, VERSION_FILE=str(tmp_path / "package.json"))
    data = ActionSettings.from_env(env).unwrap().to_json()

    assert data["github_token"] == "***"
    assert data["version_file"] == str(tmp_path / "package.json")
    assert data["rc_words"] == ["pre-alpha", "pre-beta"]


@params(
    "files,expected",
    [
        param(["package.json"], "package.json", id="package"),
        param(["composer.json"], "composer.json", id="composer"),
        param(
            ["package.json", "composer.json"], "composer.json", id="both"
        ),
    ],
)
def test_locate_version_file(
    tmp_path: Path, files: list, expected: str
) -> None:
    """composer.json is preferred over package.json."""
    for name in files:
        (tmp_path / name).write_text("{}")
    assert locate_version_file(tmp_path).unwrap() == tmp_path / expected


def test_get_input() -> None:
    """The INPUT_ prefixed form wins over the bare variable name."""
    env = {"INPUT_TAG-PREFIX": "v", "TAG-PREFIX": "x", "SKIP-TAG": "true"}
    assert get_input(env, "tag-prefix") == "v"
    assert get_input(env, "SKIP-TAG") == "true"
    assert get_input(env, "DEFAULT") is None


@params(
    "value,expected",
    [
        param(None, (), id="unset"),
        param("", ("",), id="empty"),
        param("Fix,Patch", ("fix", "patch"), id="two-words"),
        param("fix,", ("fix", ""), id="trailing-comma"),
    ],
)
def test_split_words(value: str, expected: tuple) -> None:
    """An unset list and a list of empty words are kept apart."""
    assert split_words(value) == expected


def test_from_env_relative_version_file(tmp_path: Path) -> None:
    """A relative VERSION_FILE is looked up in the workspace."""
    env = dict(
        ENV, GITHUB_WORKSPACE=str(tmp_path), VERSION_FILE="sub/composer.json"
    )
    settings = ActionSettings.from_env(env).unwrap()
    assert settings.version_file == tmp_path / "sub" / "composer.json"


def test_from_env_absolute_version_file(tmp_path: Path) -> None:
    """An absolute VERSION_FILE is used as-is."""
    version_file = tmp_path / "elsewhere" / "package.json"
    env = dict(
        ENV,
        GITHUB_WORKSPACE=str(tmp_path / "ws"),
        VERSION_FILE=str(version_file),
    )
    settings = ActionSettings.from_env(env).unwrap()
    assert settings.version_file == version_file
