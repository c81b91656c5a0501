"""Release manifest models — one entry per published version.

On disk the manifest is a JSON array of entries::

    [
      {
        "version": "0.0.1",
        "utc-unixnano": 1718000000000000000,
        "links": [{"link": "downloads/0.0.1/client-0.0.1.zip", "sha256": "..."}]
      }
    ]
"""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class ArtifactLink(BaseModel):
    """A staged artifact and the SHA-256 digest of its bytes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str = Field(alias="link")
    checksum: str = Field(alias="sha256", pattern=r"^[0-9a-f]{64}$")


class ReleaseEntry(BaseModel):
    """One versioned publication record.

    ``version`` is kept verbatim so that hand-edited entries with an
    unparsable version still survive a load/save cycle.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str
    timestamp: int = Field(
        default_factory=time.time_ns,
        alias="utc-unixnano",
        ge=_INT64_MIN,
        le=_INT64_MAX,
    )
    links: list[ArtifactLink] = Field(default_factory=list)
