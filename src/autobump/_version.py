"""Semantic version arithmetic and manifest updates.

Version increments follow the rules used by npm's `semver.inc()`, so that a
project which used to be bumped by npm tooling sees the same version
sequence (e.g. a prerelease bump of 1.2.3 with the 'beta' identifier yields
1.2.4-beta.0).
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from eris import ErisError, Err, Ok, Result
import semver

from ._bump import BumpDecision, BumpPart


def parse_version(raw: Any) -> Result[semver.Version, ErisError]:
    """Parses @raw as a semantic version (a leading 'v' or '=' is allowed)."""
    text = str(raw).strip().lstrip("=v")
    try:
        return Ok(semver.Version.parse(text))
    except ValueError as e:
        return Err(f"Invalid semantic version ({raw!r}): {e}")


def increment(
    current: Any, part: BumpPart, preid: Optional[str] = None
) -> Result[str, ErisError]:
    """Returns the version that follows @current when bumping @part.

    Arguments:
        @current: The current version string.
        @part: The part of the version to bump.
        @preid: Prerelease identifier (e.g. 'beta'). Only used when @part is
            'prerelease'.
    """
    version_r = parse_version(current)
    if isinstance(version_r, Err):
        return version_r

    version = version_r.ok()
    major, minor, patch = version.major, version.minor, version.patch
    pre = version.prerelease

    # A prerelease of X.Y.Z bumps to X.Y.Z when the bumped part is already
    # the lowest non-zero one (e.g. 2.0.0-rc.1 -> 2.0.0 for a major bump).
    new_pre: Optional[str] = None
    if part == "major":
        if not (pre and minor == 0 and patch == 0):
            major += 1
        minor = patch = 0
    elif part == "minor":
        if not (pre and patch == 0):
            minor += 1
        patch = 0
    elif part == "patch":
        if not pre:
            patch += 1
    elif part == "prerelease":
        if not pre:
            patch += 1
        new_pre = _next_prerelease(pre.split(".") if pre else [], preid)
    else:
        return Err(f"Unknown version part: {part!r}")

    new_version_r = parse_version(
        str(semver.Version(major, minor, patch, prerelease=new_pre))
    )
    if isinstance(new_version_r, Err):
        err: Err[Any, ErisError] = Err(
            f"Unable to bump the {part!r} part of version {current!r}."
        )
        return err.chain(new_version_r)

    new_version = new_version_r.ok()
    # Switching to a prerelease identifier that sorts lower (e.g. beta.5 ->
    # alpha.0) would move the version backwards.
    if not new_version > version.replace(build=None):
        return Err(
            f"The bumped version ({new_version}) is not greater than the"
            f" current version ({current}). Bumping the {part!r} part"
            f" with the {preid!r} identifier is not possible."
        )
    return Ok(str(new_version))


def _next_prerelease(ids: List[str], preid: Optional[str]) -> str:
    if not ids:
        ids = ["0"]
    else:
        for i in reversed(range(len(ids))):
            if ids[i].isdigit():
                ids[i] = str(int(ids[i]) + 1)
                break
        else:
            ids.append("0")

    if preid is not None:
        if ids[0] != preid or len(ids) < 2 or not ids[1].isdigit():
            ids = [preid, "0"]

    return ".".join(ids)


def apply_bump(
    manifest: Dict[str, Any], decision: BumpDecision
) -> Result[Dict[str, Any], ErisError]:
    """Returns a copy of @manifest with its 'version' field bumped.

    All other fields (and the order of every key) are left untouched.
    """
    if decision.part is None:
        return Err(
            f"Refusing to apply a decision that skips the bump: {decision}"
        )

    if "version" not in manifest:
        return Err("The manifest does not contain a 'version' field.")

    new_version_r = increment(
        manifest["version"], decision.part, decision.preid
    )
    if isinstance(new_version_r, Err):
        return new_version_r

    result = dict(manifest)
    result["version"] = new_version_r.ok()
    return Ok(result)


def dump_manifest(manifest: Dict[str, Any]) -> str:
    """Serializes @manifest the same way JSON.stringify(x, null, 2) does."""
    return json.dumps(manifest, indent=2, ensure_ascii=False)
