"""Configuration constants, native-image defaults, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The fixed native-image options, the properties
file name, and the connector defaults are plain data, not buried in
the formatter or the collector, so both humans and tools can change
them confidently.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level lists and strings. AotOptions bundles the per-session
switches; AotOptions.from_env() reads them from the environment. The
load_connector_url() function gives a clear error when the URL is
missing.

RULES:
- NATIVE_IMAGE_REQUIRED_OPTIONS is rendered verbatim, in order, as the
  first line of every native-image.properties file
- debug_verify only changes diagnostics, never accept/reject outcomes
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env from the project root (where the build is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# native-image.properties
# ---------------------------------------------------------------------------

NATIVE_IMAGE_REQUIRED_OPTIONS: list[str] = [
    "--allow-incomplete-classpath",
    "--report-unsupported-elements-at-runtime",
    "--no-fallback",
    "--no-server",
    "--install-exit-handlers",
    "-H:+InlineBeforeAnalysis",
]
"""Options every generated properties file passes to the builder."""

NATIVE_IMAGE_PROPERTIES_FILENAME = "native-image.properties"

INITIALIZE_AT_BUILD_TIME_OPTION = "--initialize-at-build-time="
INITIALIZE_AT_RUN_TIME_OPTION = "--initialize-at-run-time="

# ---------------------------------------------------------------------------
# Environment defaults
# ---------------------------------------------------------------------------

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


AOT_CONNECTOR_TIMEOUT_S = float(os.getenv("AOT_CONNECTOR_TIMEOUT_S", "30"))


@dataclass
class AotOptions:
    """Per-session switches for the collector.

    RULES:
    - debug_verify: emit one diagnostic line per failed verification
    """

    debug_verify: bool = False

    @classmethod
    def from_env(cls) -> AotOptions:
        """Build options from AOT_* environment variables (read at call time)."""
        return cls(debug_verify=_env_flag("AOT_DEBUG_VERIFY"))


def load_connector_url() -> str:
    """Load the live build engine URL from the environment.

    WHY: The HTTP connector is optional, but once a caller asks for it
    the URL must be present. Failing early gives a clear message instead
    of a confusing connection error on the first registration.

    RULES:
    - Raises ValueError if AOT_CONNECTOR_URL is missing or empty
    - Never returns a default/placeholder value
    """
    url = os.getenv("AOT_CONNECTOR_URL", "").strip()
    if not url:
        raise ValueError(
            "Build connector URL not configured. "
            "Add AOT_CONNECTOR_URL to the .env file or the environment."
        )
    return url
