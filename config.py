"""Configuration loading and validation for mcmeta-mojang."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CONFIG_PATH = Path("config.toml")

ENV_PREFIX = "MCMETA_MOJANG_"

DEFAULTS = {
    "manifest_url": "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json",
    "http_timeout": 30.0,
}


class EnvironmentSettings(BaseSettings):
    """Values bound from MCMETA_MOJANG_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
    )

    manifest_url: str | None = None
    http_timeout: float | None = None


def is_absolute_url(url: str) -> bool:
    """True for http(s) URLs with a host."""
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@dataclass(frozen=True)
class Config:
    manifest_url: str
    http_timeout: float

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        manifest_url_override: str | None = None,
        timeout_override: float | None = None,
    ) -> "Config":
        """Load configuration: defaults, then TOML file, then environment, then overrides."""
        config_data = dict(DEFAULTS)

        path = config_path or DEFAULT_CONFIG_PATH
        if path.exists():
            with open(path, "rb") as f:
                file_config = tomllib.load(f)
                config_data.update(
                    {key: value for key, value in file_config.items() if key in DEFAULTS}
                )

        env = EnvironmentSettings()
        if env.manifest_url:
            config_data["manifest_url"] = env.manifest_url
        if env.http_timeout is not None:
            config_data["http_timeout"] = env.http_timeout

        if manifest_url_override:
            config_data["manifest_url"] = manifest_url_override
        if timeout_override is not None:
            config_data["http_timeout"] = timeout_override

        manifest_url = str(config_data["manifest_url"])
        if not is_absolute_url(manifest_url):
            raise ValueError(f"manifest_url must be an absolute http(s) URL: {manifest_url!r}")

        http_timeout = float(config_data["http_timeout"])
        if http_timeout <= 0:
            raise ValueError(f"http_timeout must be positive: {http_timeout}")

        return cls(manifest_url=manifest_url, http_timeout=http_timeout)
