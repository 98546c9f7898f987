from __future__ import annotations

import os
from pathlib import Path

import pytest


def test_load_defaults_when_no_config(clean_env: None, temp_dir: Path) -> None:
    """Test that defaults are used when no config file exists."""
    os.chdir(temp_dir)

    from requisite.config import DEFAULT_SETTINGS_ACTION, RequisiteConfig, load_config
    from requisite.tokens import TOKEN_MAX

    config = load_config()
    assert isinstance(config, RequisiteConfig)
    assert config.tokens.ceiling == TOKEN_MAX
    assert config.permissions.settings_action == DEFAULT_SETTINGS_ACTION
    assert config.trace.log_transitions is True


def test_load_project_config(
    clean_env: None, temp_dir: Path, sample_config_yaml: str
) -> None:
    """Test loading configuration from requisite.yaml in the working dir."""
    os.chdir(temp_dir)
    (temp_dir / "requisite.yaml").write_text(sample_config_yaml)

    from requisite.config import load_config

    config = load_config()
    assert config.tokens.ceiling == 1000
    assert config.permissions.settings_action == "app_settings"
    assert config.trace.log_transitions is False


def test_load_explicit_config_path(
    clean_env: None, temp_dir: Path, sample_config_yaml: str
) -> None:
    """Test loading configuration from an explicit path."""
    config_path = temp_dir / "custom.yaml"
    config_path.write_text(sample_config_yaml)

    from requisite.config import RequisiteConfig, load_config

    config = load_config(config_path)
    assert config.tokens.ceiling == 1000
    # The path only applies to that one call
    assert RequisiteConfig._project_config_path is None


def test_env_var_overrides(
    clean_env: None,
    temp_dir: Path,
    sample_config_yaml: str,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Test that REQUISITE_* environment variables override file values."""
    os.chdir(temp_dir)
    (temp_dir / "requisite.yaml").write_text(sample_config_yaml)
    monkeypatch.setenv("REQUISITE_TOKENS__CEILING", "500")

    from requisite.config import load_config

    config = load_config()
    assert config.tokens.ceiling == 500
    assert config.permissions.settings_action == "app_settings"


def test_project_config_overrides_user_config(
    clean_env: None, temp_dir: Path
) -> None:
    """Test that project config takes precedence over the user config."""
    os.chdir(temp_dir)

    from requisite.config import get_user_config_path, load_config

    user_config = get_user_config_path()
    user_config.parent.mkdir(parents=True)
    user_config.write_text(
        "tokens:\n  ceiling: 2000\npermissions:\n  settings_action: user_settings\n"
    )
    (temp_dir / "requisite.yaml").write_text("tokens:\n  ceiling: 3000\n")

    config = load_config()
    assert config.tokens.ceiling == 3000
    assert config.permissions.settings_action == "user_settings"


def test_user_config_path_is_under_home(clean_env: None, temp_dir: Path) -> None:
    """Test the user config location follows HOME."""
    from requisite.config import get_user_config_path

    assert get_user_config_path() == (
        temp_dir / "home" / ".config" / "requisite" / "config.yaml"
    )


def test_invalid_config_raises_config_error(clean_env: None, temp_dir: Path) -> None:
    """Test that validation errors surface as ConfigError with the field."""
    os.chdir(temp_dir)
    (temp_dir / "requisite.yaml").write_text("tokens:\n  ceiling: 70000\n")

    from requisite.config import load_config
    from requisite.exceptions import ConfigError

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.field == "tokens.ceiling"
    assert exc_info.value.value == 70000


def test_invalid_env_value_raises_config_error(
    clean_env: None, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that a bad environment value is reported the same way."""
    os.chdir(temp_dir)
    monkeypatch.setenv("REQUISITE_TOKENS__CEILING", "0")

    from requisite.config import load_config
    from requisite.exceptions import ConfigError

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.field == "tokens.ceiling"


def test_malformed_yaml_raises_config_error(clean_env: None, temp_dir: Path) -> None:
    """Test that unparsable YAML raises ConfigError."""
    os.chdir(temp_dir)
    (temp_dir / "requisite.yaml").write_text("tokens: [unclosed\n")

    from requisite.config import load_config
    from requisite.exceptions import ConfigError

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config()


def test_non_mapping_yaml_raises_config_error(
    clean_env: None, temp_dir: Path
) -> None:
    """Test that a YAML list at the top level is rejected."""
    os.chdir(temp_dir)
    (temp_dir / "requisite.yaml").write_text("- tokens\n- trace\n")

    from requisite.config import load_config
    from requisite.exceptions import ConfigError

    with pytest.raises(ConfigError, match="must be a mapping"):
        load_config()


def test_empty_config_file_uses_defaults(clean_env: None, temp_dir: Path) -> None:
    """Test that an empty requisite.yaml behaves like a missing one."""
    os.chdir(temp_dir)
    (temp_dir / "requisite.yaml").write_text("")

    from requisite.config import load_config
    from requisite.tokens import TOKEN_MAX

    config = load_config()
    assert config.tokens.ceiling == TOKEN_MAX


def test_init_arguments_take_precedence(clean_env: None, temp_dir: Path) -> None:
    """Test that explicit constructor values beat every other source."""
    os.chdir(temp_dir)
    (temp_dir / "requisite.yaml").write_text("tokens:\n  ceiling: 1000\n")

    from requisite.config import RequisiteConfig, TokenConfig

    config = RequisiteConfig(tokens=TokenConfig(ceiling=42))
    assert config.tokens.ceiling == 42
