"""Configuration management for alidnshook."""

from pathlib import Path

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILE_NAMES = ("alidnshook.yaml", "alidnshook.yml", "appsettings.json")


class Credentials(BaseModel):
    """Aliyun AccessKey pair."""

    model_config = ConfigDict(frozen=True)

    key_id: str
    key_secret: str = Field(repr=False)


class AliyunConfig(BaseModel):
    """Aliyun DNS configuration.

    Keys may be written in snake_case or in the PascalCase used by
    ``appsettings.json`` files (``AccessKeyId``, ``RecordValue``...).
    """

    model_config = ConfigDict(populate_by_name=True)

    access_key_id: str | None = Field(
        default=None, validation_alias=AliasChoices("access_key_id", "AccessKeyId")
    )
    access_key_secret: str | None = Field(
        default=None,
        validation_alias=AliasChoices("access_key_secret", "AccessKeySecret"),
    )
    domain_name: str | None = Field(
        default=None, validation_alias=AliasChoices("domain_name", "DomainName")
    )
    record_value: str | None = Field(
        default=None, validation_alias=AliasChoices("record_value", "RecordValue")
    )
    endpoint: str = "alidns.aliyuncs.com"
    api_version: str = "2015-01-09"
    timeout: float = 30.0  # Seconds, per HTTP call


class HookConfig(BaseModel):
    """Main configuration for alidnshook."""

    aliyun: AliyunConfig = Field(
        default_factory=AliyunConfig,
        validation_alias=AliasChoices("aliyun", "Aliyun"),
    )


class EnvironmentSettings(BaseSettings):
    """Environment variables for credentials (override the config file)."""

    model_config = SettingsConfigDict(env_prefix="ALIDNSHOOK_", env_file=".env")

    access_key_id: str | None = None
    access_key_secret: str | None = None


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find a config file in current or parent directories."""
    search_path = start_path or Path.cwd()

    for path in [search_path, *search_path.parents]:
        for name in CONFIG_FILE_NAMES:
            config_file = path / name
            if config_file.exists():
                return config_file

    return None


def load_config(config_path: Path | None = None) -> HookConfig:
    """Load configuration from a YAML (or JSON) file.

    An explicit ``config_path`` must exist. Without one, the nearest config
    file is used, falling back to defaults when none is found.
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return HookConfig()
    elif not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8-sig") as f:
        data = yaml.safe_load(f)

    return HookConfig(**(data or {}))


def load_env_settings() -> EnvironmentSettings:
    """Load environment settings from .env and environment variables."""
    return EnvironmentSettings()


def resolve_credentials(
    config: HookConfig, settings: EnvironmentSettings
) -> Credentials | None:
    """Merge credentials from the environment and the config file.

    Returns None when either half of the key pair is missing.
    """
    key_id = settings.access_key_id or config.aliyun.access_key_id
    key_secret = settings.access_key_secret or config.aliyun.access_key_secret

    if not key_id or not key_secret:
        return None
    return Credentials(key_id=key_id, key_secret=key_secret)
