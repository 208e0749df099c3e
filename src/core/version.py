"""Build and version metadata.

The version comes from the installed distribution; commit and build date are
optional and injected at build time through environment variables.
"""

from __future__ import annotations

import os
import platform
from importlib.metadata import PackageNotFoundError, version

from pydantic import BaseModel, Field

DISTRIBUTION_NAME = "keybasectl"


class BuildInfo(BaseModel):
    version: str = Field(..., min_length=1)
    commit: str | None = None
    build_date: str | None = None
    python_version: str = Field(default_factory=platform.python_version)
    system: str = Field(default_factory=platform.platform)


def build_context() -> BuildInfo:
    """Collect the metadata shown by `keybasectl version`."""

    try:
        current = version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        current = "0.0.0+unknown"
    return BuildInfo(
        version=current,
        commit=os.environ.get("KEYBASECTL_BUILD_COMMIT") or None,
        build_date=os.environ.get("KEYBASECTL_BUILD_DATE") or None,
    )
