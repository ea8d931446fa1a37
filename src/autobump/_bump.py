"""Logic for deciding which part of the project version to bump."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Literal, Optional, Sequence, Tuple

from logrus import Logger
from pydantic.dataclasses import dataclass

from ._constants import BUMP_COMMIT_MARKER


if TYPE_CHECKING:
    from ._settings import ActionSettings


BumpPart = Literal["major", "minor", "patch", "prerelease"]
Reason = Literal[
    "bump_commit",
    "major",
    "minor",
    "prerelease",
    "patch",
    "no_keywords",
    "default",
]

PREID_SEP = "-"

logger = Logger(__name__)


@dataclass(frozen=True)
class BumpDecision:
    """The outcome of classifying a set of commit messages.

    A decision whose `part` is None tells the caller to leave the project
    version alone.
    """

    part: Optional[BumpPart]
    reason: Reason
    preid: Optional[str] = None
    keyword: Optional[str] = None

    @property
    def skip(self) -> bool:
        return self.part is None


def classify(
    messages: Sequence[str], settings: ActionSettings
) -> BumpDecision:
    """Decides how the project version should be bumped.

    Arguments:
        @messages: The (lower-cased) commit messages of the triggering event.
        @settings: Supplies the keyword lists and the default bump part.

    Returns:
        The first matching decision from the following chain: our own bump
        commit (skip), major, minor, prerelease, patch (or skip if patch
        keywords are configured but none match), default.
    """
    messages = [message.lower() for message in messages]
    if not messages:
        logger.warning(
            "Couldn't find any commits in this event, incrementing patch"
            " version by default..."
        )

    if _find_keyword(messages, [BUMP_COMMIT_MARKER]) is not None:
        return BumpDecision(None, "bump_commit", keyword=BUMP_COMMIT_MARKER)

    keyword_chain: Tuple[Tuple[BumpPart, Tuple[str, ...]], ...] = (
        ("major", settings.major_words),
        ("minor", settings.minor_words),
        ("prerelease", settings.rc_words),
    )
    for part, words in keyword_chain:
        keyword = _find_keyword(messages, words)
        if keyword is None:
            continue

        preid = get_preid(keyword) if part == "prerelease" else None
        return BumpDecision(part, part, preid=preid, keyword=keyword)

    # NOTE: A patch list made up only of empty entries still counts as
    #   "configured" here, even though it can never match.
    if settings.patch_words:
        keyword = _find_keyword(messages, settings.patch_words)
        if keyword is None:
            return BumpDecision(None, "no_keywords")
        return BumpDecision("patch", "patch", keyword=keyword)

    return BumpDecision(settings.default, "default")


def get_preid(keyword: str) -> Optional[str]:
    """Returns the prerelease identifier embedded in a keyword.

    >>> get_preid("pre-alpha")
    'alpha'
    >>> get_preid("rc") is None
    True
    """
    if PREID_SEP not in keyword:
        return None

    preid = keyword.split(PREID_SEP)[1]
    return preid or None


def _find_keyword(
    messages: Iterable[str], words: Iterable[str]
) -> Optional[str]:
    words = [word.lower() for word in words if word]
    for message in messages:
        for word in words:
            if word in message:
                return word
    return None
