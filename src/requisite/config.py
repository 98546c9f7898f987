from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from requisite.exceptions import ConfigError
from requisite.logging import get_logger
from requisite.tokens import TOKEN_MAX

__all__ = [
    "RequisiteConfig",
    "TokenConfig",
    "PermissionConfig",
    "TraceConfig",
    "DEFAULT_SETTINGS_ACTION",
    "PROJECT_CONFIG_NAME",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)

DEFAULT_SETTINGS_ACTION = "application_details_settings"

PROJECT_CONFIG_NAME = "requisite.yaml"


class TokenConfig(BaseModel):
    """Settings for request token derivation.

    Attributes:
        ceiling: Upper bound tokens are folded into (inclusive range is
            0..ceiling-1 for derived tokens, 0..ceiling for explicit ones).
    """

    ceiling: int = Field(default=TOKEN_MAX, ge=1, le=TOKEN_MAX)


class PermissionConfig(BaseModel):
    """Settings for permission cases.

    Attributes:
        settings_action: Action started when a permission case escalates the
            user to the host's settings screen.
    """

    settings_action: str = Field(default=DEFAULT_SETTINGS_ACTION, min_length=1)


class TraceConfig(BaseModel):
    """Settings for orchestrator tracing.

    Attributes:
        log_transitions: Emit a debug event for every case transition.
    """

    log_transitions: bool = True


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that reads one YAML file."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Top level of {yaml_file} must be a mapping",
                    value=loaded,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class RequisiteConfig(BaseSettings):
    """Root configuration object for requisite."""

    model_config = SettingsConfigDict(
        env_prefix="REQUISITE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Set by load_config() for the duration of one instantiation.
    _project_config_path: ClassVar[Path | None] = None

    tokens: TokenConfig = Field(default_factory=TokenConfig)
    permissions: PermissionConfig = Field(default_factory=PermissionConfig)
    trace: TraceConfig = Field(default_factory=TraceConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order the settings sources.

        Priority (highest to lowest):
        1. Init arguments
        2. Environment variables (REQUISITE_*)
        3. Project YAML config (./requisite.yaml)
        4. User YAML config (~/.config/requisite/config.yaml)
        5. Model defaults
        """
        project_config_path = cls._project_config_path or (
            Path.cwd() / PROJECT_CONFIG_NAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/requisite/config.yaml
    """
    return Path.home() / ".config" / "requisite" / "config.yaml"


def load_config(config_path: Path | None = None) -> RequisiteConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to the project config file. Defaults to
            ./requisite.yaml

    Returns:
        RequisiteConfig with merged configuration.

    Raises:
        ConfigError: If a file is not valid YAML or a value fails validation.
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_NAME

    if not config_path.exists():
        logger.debug("project_config_missing", path=str(config_path))

    RequisiteConfig._project_config_path = config_path
    try:
        return RequisiteConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        RequisiteConfig._project_config_path = None
