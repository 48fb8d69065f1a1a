"""Unified settings: CLI flags and env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs  (CLI flags passed by Click)
  2. Env vars     (``TYPESHAPE_*`` prefix)
  3. Code defaults
"""

from __future__ import annotations

from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


class TypeshapeSettings(BaseSettings):
    """Settings for the typeshape CLI, frozen after construction.

    Stored on the :class:`~typeshape.commands._context.AppContext` at the
    CLI root level.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TYPESHAPE_",
    }

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only CLI flags and env vars; no dotenv or secret files."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> TypeshapeSettings:
        """Construct settings from a CLI invocation.

        Flags left at their Click default (``False``) do not override
        env vars, so ``TYPESHAPE_VERBOSE=1`` works without ``-v``.
        """
        overrides = {key: value for key, value in cli_flags.items() if value}
        return cls(**overrides)
