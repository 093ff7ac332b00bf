"""Configuration dataclass for mocked.

Provides MockedConfig for centralized configuration management. Programmatic
users construct it directly; the CLI uses from_env().

Environment Variables:
    MOCKED_DIRECTIVE: Name of the annotation directive (default: Mocked)
    MOCKED_REFERENCE_MARKER: Marker selecting reference semantics (default: AnyObject)
    MOCKED_CONCURRENCY_MARKER: Marker making override closures concurrency-safe
        (default: Sendable)
    MOCKED_CONFIG_DIR: User config directory holding .env (default: ~/.config/mocked)
    MOCKED_DISABLE_DEBUG_LOG: Set to 1 to ignore --debug-log
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from mocked.core.models import SynthesisOptions
from mocked.domain.directive import DEFAULT_DIRECTIVE_NAME
from mocked.domain.errors import MockedError

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ConfigError(MockedError):
    """Raised when an environment variable holds an unusable value."""

    pass


def _identifier_from_env(variable: str, default: str) -> str:
    raw = os.environ.get(variable)
    if raw is None or not raw.strip():
        return default
    value = raw.strip()
    if not _IDENTIFIER.match(value):
        raise ConfigError(f"{variable}: '{value}' is not a valid identifier")
    return value


@dataclass(frozen=True)
class MockedConfig:
    """Settings for a mocked run.

    Attributes:
        directive_name: Attribute name that requests a mock.
        reference_marker: Inherited marker selecting reference semantics.
        concurrency_marker: Inherited marker making closures concurrency-safe.
    """

    directive_name: str = DEFAULT_DIRECTIVE_NAME
    reference_marker: str = "AnyObject"
    concurrency_marker: str = "Sendable"

    @classmethod
    def from_env(cls) -> MockedConfig:
        """Build configuration from environment variables.

        Raises:
            ConfigError: If a variable is set to something that is not an
                identifier.
        """
        return cls(
            directive_name=_identifier_from_env(
                "MOCKED_DIRECTIVE", DEFAULT_DIRECTIVE_NAME
            ),
            reference_marker=_identifier_from_env(
                "MOCKED_REFERENCE_MARKER", "AnyObject"
            ),
            concurrency_marker=_identifier_from_env(
                "MOCKED_CONCURRENCY_MARKER", "Sendable"
            ),
        )

    def synthesis_options(self) -> SynthesisOptions:
        return SynthesisOptions(
            reference_marker=self.reference_marker,
            concurrency_marker=self.concurrency_marker,
        )
