"""Form configuration.

FormConfig is a frozen dataclass — immutable after creation, checked once
at construction.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from regform.errors import ConfigurationError

DEFAULT_ENDPOINT = "https://webapis.bloomtechdev.com/registration"

_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


@dataclass(frozen=True, slots=True)
class FormConfig:
    """Form configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FormConfig(endpoint="http://localhost:8000/register", timeout=10.0)
    """

    # Transport
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float | None = None  # None = wait for the server indefinitely

    # Logging
    log_level: str = "warning"

    def __post_init__(self) -> None:
        if not self.endpoint.startswith(("http://", "https://")):
            msg = f"endpoint must be an http(s) URL, got {self.endpoint!r}"
            raise ConfigurationError(msg)
        if self.timeout is not None and self.timeout <= 0:
            msg = f"timeout must be positive or None, got {self.timeout!r}"
            raise ConfigurationError(msg)
        if self.log_level.lower() not in _LOG_LEVELS:
            options = ", ".join(sorted(_LOG_LEVELS))
            msg = f"log_level must be one of: {options}; got {self.log_level!r}"
            raise ConfigurationError(msg)

    @property
    def logging_level(self) -> int:
        """The ``logging`` module constant for ``log_level``."""
        return logging.getLevelNamesMapping()[self.log_level.upper()]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> FormConfig:
        """Build a config from ``REGFORM_*`` environment variables.

        Unset variables fall back to the field defaults.
        """
        env = os.environ if environ is None else environ
        timeout: float | None = None
        raw_timeout = env.get("REGFORM_TIMEOUT", "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                msg = f"REGFORM_TIMEOUT must be a number, got {raw_timeout!r}"
                raise ConfigurationError(msg) from None
        return cls(
            endpoint=env.get("REGFORM_ENDPOINT", DEFAULT_ENDPOINT),
            timeout=timeout,
            log_level=env.get("REGFORM_LOG_LEVEL", "warning"),
        )
