"""Semantic version model — parsing, canonical form, and precedence."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

# semver.org 2.0.0 grammar, with an optional leading "v".
_SEMVER_RE = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$",
    re.ASCII,
)


class SemanticVersion(BaseModel):
    """An immutable ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]`` version.

    Comparison operators follow semver precedence: build metadata is
    ignored, and a pre-release sorts below its associated normal version.
    Equality (``==``) is structural and does consider build metadata.
    """

    model_config = ConfigDict(frozen=True)

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> SemanticVersion:
        """Parse *text*, raising ``ValueError`` if it is not a full semver."""
        match = _SEMVER_RE.match(text.strip())
        if match is None:
            raise ValueError(f"not a semantic version: {text!r}")
        pre = match.group("prerelease")
        build = match.group("build")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=tuple(pre.split(".")) if pre else (),
            build=tuple(build.split(".")) if build else (),
        )

    def bump_patch(self) -> SemanticVersion:
        """Next patch release; pre-release and build metadata are dropped."""
        return SemanticVersion(major=self.major, minor=self.minor, patch=self.patch + 1)

    def precedence_key(self) -> tuple:
        if not self.prerelease:
            # A normal version outranks any of its pre-releases.
            return (self.major, self.minor, self.patch, 1, ())
        idents = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease
        )
        return (self.major, self.minor, self.patch, 0, idents)

    def __lt__(self, other: SemanticVersion) -> bool:
        return self.precedence_key() < other.precedence_key()

    def __le__(self, other: SemanticVersion) -> bool:
        return self.precedence_key() <= other.precedence_key()

    def __gt__(self, other: SemanticVersion) -> bool:
        return self.precedence_key() > other.precedence_key()

    def __ge__(self, other: SemanticVersion) -> bool:
        return self.precedence_key() >= other.precedence_key()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


ZERO_VERSION = SemanticVersion(major=0, minor=0, patch=0)
