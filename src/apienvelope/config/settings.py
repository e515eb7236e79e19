"""Settings for apienvelope — init kwargs, env vars, and code defaults.

Priority chain (highest to lowest):
  1. Init kwargs   — values passed by the embedding application
  2. Env vars      — ``APIENVELOPE_*`` prefix
  3. Code defaults — baked into the fields below
"""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from apienvelope.domain.types import ProtocolVersion


class EnvelopeSettings(BaseSettings):
    """Defaults applied when a service is built without explicit options.

    Attributes:
        discovery_version: Protocol version for services that do not
            declare one.
        encoding: Text encoding of response bytes.
        verbose: Enable DEBUG-level logging for the ``apienvelope`` logger.
        log_json: Render log lines as JSON instead of console output.
        log_level: Level for the ``apienvelope`` logger when not verbose.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "APIENVELOPE_",
    }

    discovery_version: ProtocolVersion = ProtocolVersion.V1
    encoding: str = "utf-8"
    verbose: bool = False
    log_json: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only init kwargs and env vars; no dotenv or secrets files."""
        return (init_settings, env_settings)
