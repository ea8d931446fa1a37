"""Contains constant variables."""

from __future__ import annotations

from typing import Final, Tuple


PROJECT_NAME: Final = "autobump"

# Every commit made by this tool contains this phrase. Seeing it again in a
# later push means we are being re-triggered by our own commit.
BUMP_COMMIT_MARKER: Final = "version bump to"
BUMP_COMMIT_TEMPLATE: Final = "ci: " + BUMP_COMMIT_MARKER + " {}"

# Later entries win when more than one of these files exists.
MANIFEST_CANDIDATES: Final[Tuple[str, ...]] = ("package.json", "composer.json")

DEFAULT_GIT_USER: Final = "Automated Version Bump"
DEFAULT_GIT_EMAIL: Final = "version-bot@users.noreply.github.com"

MASK: Final = "***"

MSG_BUMP_COMMIT: Final = "No action necessary!"
MSG_NO_KEYWORDS: Final = "No version keywords found, skipping bump."
MSG_SUCCESS: Final = "Version bumped!"
MSG_FAILURE: Final = "Failed to bump version"
