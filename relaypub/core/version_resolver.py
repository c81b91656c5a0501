"""Version resolution — explicit override or automatic patch bump."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from relaypub.core.errors import InvalidVersion
from relaypub.models.manifest import ReleaseEntry
from relaypub.models.versioning import ZERO_VERSION, SemanticVersion

logger = logging.getLogger(__name__)


def parse_explicit(version: str) -> SemanticVersion:
    """Validate an operator-supplied version; only full ``a.b.c`` forms pass."""
    try:
        return SemanticVersion.parse(version)
    except ValueError as exc:
        raise InvalidVersion(f"invalid version {version!r}: expected MAJOR.MINOR.PATCH") from exc


def highest_version(entries: Iterable[ReleaseEntry]) -> SemanticVersion:
    """Highest parsable version in the manifest, or ``0.0.0``.

    Entries whose version does not parse are skipped; they may come from
    manual edits and must not block a release.
    """
    highest = ZERO_VERSION
    for entry in entries:
        try:
            candidate = SemanticVersion.parse(entry.version)
        except ValueError:
            logger.debug("Ignoring unparsable manifest version %r.", entry.version)
            continue
        if candidate > highest:
            highest = candidate
    return highest


def resolve_version(
    entries: Iterable[ReleaseEntry], explicit: str | None = None
) -> SemanticVersion:
    """Pick the version for this release.

    With *explicit* set it is validated and returned in canonical form;
    otherwise the highest manifest version gets its patch bumped.
    """
    if explicit:
        version = parse_explicit(explicit)
        logger.info("Using explicit version %s.", version)
        return version
    version = highest_version(entries).bump_patch()
    logger.info("Resolved next version %s.", version)
    return version
