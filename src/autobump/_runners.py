"""Contains the clack runner functions."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Sequence, Tuple

from eris import ErisError, Err, Ok, Result
from logrus import Logger

from ._bump import BumpDecision, classify
from ._config import BumpConfig, Config, InfoConfig
from ._constants import (
    BUMP_COMMIT_TEMPLATE,
    MSG_BUMP_COMMIT,
    MSG_FAILURE,
    MSG_NO_KEYWORDS,
    MSG_SUCCESS,
)
from ._git import (
    GitRunner,
    ProctorGitRunner,
    get_current_branch,
    get_remote_url,
)
from ._helpers import (
    TextFile,
    get_commit_messages,
    read_event,
    read_manifest,
    write_manifest,
)
from ._settings import ActionSettings
from ._version import apply_bump


logger = Logger(__name__)


def run_bump(cfg: BumpConfig) -> int:
    """Clack runner for the 'bump' subcommand."""
    settings_messages_r = _load(cfg)
    if isinstance(settings_messages_r, Err):
        e = settings_messages_r.err()
        logger.error(
            "An error occurred while loading this action's configuration.",
            error=e.to_json(),
        )
        return 1

    settings, messages = settings_messages_r.ok()
    git = ProctorGitRunner(secrets=[settings.github_token])
    return bump_version(
        settings,
        git=git,
        manifest_file=settings.version_file,
        messages=messages,
        dry_run=cfg.dry_run,
    )


def run_info(cfg: InfoConfig) -> int:
    """Clack runner for the 'info' subcommand."""
    settings_messages_r = _load(cfg)
    if isinstance(settings_messages_r, Err):
        e = settings_messages_r.err()
        logger.error(
            "An error occurred while loading this action's configuration.",
            error=e.to_json(),
        )
        return 1

    settings, messages = settings_messages_r.ok()
    decision = classify(messages, settings)

    data: Dict[str, Any] = {}
    data["settings"] = settings.to_json()
    data["messages"] = messages
    data["decision"] = {
        "part": decision.part,
        "preid": decision.preid,
        "reason": decision.reason,
        "keyword": decision.keyword,
    }

    if not decision.skip:
        new_manifest_r = _compute_manifests(settings.version_file, decision)
        if isinstance(new_manifest_r, Err):
            e = new_manifest_r.err()
            logger.error(
                "An error occurred while computing the new version.",
                version_file=settings.version_file,
                error=e.to_json(),
            )
            return 1

        manifest, new_manifest = new_manifest_r.ok()
        data["current_version"] = manifest["version"]
        data["new_version"] = new_manifest["version"]

    print(json.dumps(data, sort_keys=True))
    return 0


def bump_version(
    settings: ActionSettings,
    *,
    git: GitRunner,
    manifest_file: TextFile,
    messages: Sequence[str],
    dry_run: bool = False,
) -> int:
    """Bumps the project version (if necessary) and pushes the result.

    Arguments:
        @settings: The configuration of this action run.
        @git: Used to run every git command.
        @manifest_file: The file which holds the project version.
        @messages: The commit messages of the triggering event.
        @dry_run: If set, nothing is written and no git command is run.

    Returns:
        The exit code of this action run.
    """
    logger.info("Commit messages: %r", list(messages))
    decision = classify(messages, settings)
    if decision.skip:
        if decision.reason == "bump_commit":
            logger.info(MSG_BUMP_COMMIT)
        else:
            logger.info(MSG_NO_KEYWORDS)
        return 0

    new_version_r = _bump_version(
        settings,
        decision,
        git=git,
        manifest_file=manifest_file,
        dry_run=dry_run,
    )
    if isinstance(new_version_r, Err):
        e = new_version_r.err()
        logger.error(MSG_FAILURE, error=e.to_json())
        return 1

    new_version = new_version_r.ok()
    if dry_run:
        logger.info(
            "Dry run: the version would have been bumped to %s.", new_version
        )
    else:
        logger.info(MSG_SUCCESS, new_version=new_version)
    return 0


def _bump_version(
    settings: ActionSettings,
    decision: BumpDecision,
    *,
    git: GitRunner,
    manifest_file: TextFile,
    dry_run: bool,
) -> Result[str, ErisError]:
    manifests_r = _compute_manifests(manifest_file, decision)
    if isinstance(manifests_r, Err):
        return manifests_r

    manifest, new_manifest = manifests_r.ok()
    current, new_version = manifest["version"], new_manifest["version"]
    logger.info(
        "current: %s / version: %s%s",
        current,
        decision.part,
        "" if decision.preid is None else f" (preid={decision.preid})",
    )

    # Nothing below is needed unless we are going to push.
    if dry_run:
        return Ok(new_version)

    branch_r = get_current_branch(
        settings.github_ref, settings.github_head_ref
    )
    if isinstance(branch_r, Err):
        return branch_r

    branch = branch_r.ok()
    logger.info("currentBranch: %s", branch)

    remote_r = get_remote_url(
        settings.github_actor,
        settings.github_token,
        settings.github_repository,
    )
    if isinstance(remote_r, Err):
        return remote_r

    remote = remote_r.ok()
    for args in [
        ("config", "user.name", settings.git_user),
        ("config", "user.email", settings.git_email),
    ]:
        if isinstance(out_r := git(*args), Err):
            return out_r

    # This first commit is made on the checked out (detached) commit, so any
    # later step in this workflow sees the new version.
    write_r = write_manifest(manifest_file, new_manifest)
    if isinstance(write_r, Err):
        return write_r

    commit_r = git(
        "commit", "-a", "-m", BUMP_COMMIT_TEMPLATE.format(new_version)
    )
    if isinstance(commit_r, Err):
        return commit_r

    # Now do the same thing on the actual branch...
    if settings.github_head_ref:
        if isinstance(out_r := git("fetch"), Err):
            return out_r

    if isinstance(out_r := git("checkout", branch), Err):
        return out_r

    tag = f"{settings.tag_prefix}{new_version}"
    logger.info("new version: %s", tag)

    commit_r = git("commit", "-a", "-m", BUMP_COMMIT_TEMPLATE.format(tag))
    if isinstance(commit_r, Err):
        logger.warning(
            "The second git commit failed. This is expected when the"
            " repository was checked out using actions/checkout@v2 or newer"
            " (this commit is only needed for actions/checkout@v1).",
            error=commit_r.err().to_json(),
        )

    push_cmds: List[Tuple[str, ...]]
    if settings.skip_tag:
        push_cmds = [("push", remote)]
    else:
        push_cmds = [
            ("tag", tag),
            ("push", remote, "--follow-tags"),
            ("push", remote, "--tags"),
        ]

    for args in push_cmds:
        if isinstance(out_r := git(*args), Err):
            return out_r

    return Ok(new_version)


def _compute_manifests(
    manifest_file: TextFile, decision: BumpDecision
) -> Result[Tuple[Dict[str, Any], Dict[str, Any]], ErisError]:
    manifest_r = read_manifest(manifest_file)
    if isinstance(manifest_r, Err):
        return manifest_r

    manifest = manifest_r.ok()
    new_manifest_r = apply_bump(manifest, decision)
    if isinstance(new_manifest_r, Err):
        err: Err[Any, ErisError] = Err(
            f"Unable to bump the version found in {manifest_file}."
        )
        return err.chain(new_manifest_r)

    return Ok((manifest, new_manifest_r.ok()))


def _load(
    cfg: Config,
) -> Result[Tuple[ActionSettings, List[str]], ErisError]:
    settings_r = ActionSettings.from_env(
        os.environ,
        version_file=cfg.version_file,
        event_path=cfg.event_path,
        workspace=cfg.workspace,
    )
    if isinstance(settings_r, Err):
        return settings_r

    settings = settings_r.ok()
    event_r = read_event(settings.event_path)
    if isinstance(event_r, Err):
        return event_r

    return Ok((settings, get_commit_messages(event_r.ok())))
