from __future__ import annotations

import os
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version

try:
    _dist_version = version("moulton")
except PackageNotFoundError:
    _dist_version = "0.1.0-dev"

APP_VERSION = os.getenv("APP_VERSION", _dist_version)
GIT_SHA = os.getenv("GIT_SHA", "local")
BUILD_TIME_UTC = os.getenv("BUILD_TIME_UTC") or datetime.now(timezone.utc).isoformat()
