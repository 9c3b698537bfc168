# settings.py
from __future__ import annotations
import json, math, os
from dataclasses import dataclass, asdict, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

APP_NAME = "transkit"
DEFAULT_ENDPOINT = "https://api.cognitive.microsofttranslator.com/"


class ConfigError(Exception):
    """Required configuration (usually API credentials) is missing or invalid."""


def user_config_dir() -> Path:
    override = os.getenv("TRANSKIT_HOME")
    if override:
        return Path(override)
    return Path(os.getenv("APPDATA", "")) / APP_NAME if os.name == "nt" else Path.home() / f".config/{APP_NAME}"


def _checked_timeout(value: float, name: str) -> float:
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"{name} must be a positive number of seconds, got {value!r}")
    return value


def _user_config_path(filename: str = "settings.json") -> Path:
    return user_config_dir() / filename


@dataclass
class Settings:
    api_key: str = ""
    region: str = ""
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = 15.0
    use_cache: bool = True
    max_cache_entries: int = 1000

    def __post_init__(self):
        self.timeout = _checked_timeout(self.timeout, "timeout")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        return cls(
            api_key=data.get("api_key", ""),
            region=data.get("region", ""),
            endpoint=data.get("endpoint") or DEFAULT_ENDPOINT,
            timeout=float(data.get("timeout", 15.0)),
            use_cache=bool(data.get("use_cache", True)),
            max_cache_entries=max(1, int(data.get("max_cache_entries", 1000))),
        )

    def with_env(self) -> "Settings":
        """Environment variables take precedence over the settings file."""
        updated = replace(self)
        if os.getenv("TRANSLATOR_API_KEY"):
            updated.api_key = os.environ["TRANSLATOR_API_KEY"]
        if os.getenv("TRANSLATOR_REGION"):
            updated.region = os.environ["TRANSLATOR_REGION"]
        if os.getenv("TRANSLATOR_ENDPOINT"):
            updated.endpoint = os.environ["TRANSLATOR_ENDPOINT"]
        if os.getenv("TRANSLATOR_TIMEOUT"):
            try:
                timeout = float(os.environ["TRANSLATOR_TIMEOUT"])
            except ValueError:
                raise ConfigError(f"TRANSLATOR_TIMEOUT must be a number, got {os.environ['TRANSLATOR_TIMEOUT']!r}") from None
            updated.timeout = _checked_timeout(timeout, "TRANSLATOR_TIMEOUT")
        return updated

    def require_credentials(self) -> None:
        missing = []
        if not self.api_key:
            missing.append("TRANSLATOR_API_KEY")
        if not self.region:
            missing.append("TRANSLATOR_REGION")
        if missing:
            raise ConfigError(
                f"{' and '.join(missing)} {'is' if len(missing) == 1 else 'are'} required. "
                "Set them in your environment or a .env file, or run `transkit --setup`."
            )

    def save_to_file(self, filepath: Optional[str | os.PathLike] = None) -> Path:
        path = Path(filepath) if filepath else _user_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        return path

    @classmethod
    def load_from_file(cls, filepath: Optional[str | os.PathLike] = None) -> "Settings":
        path = Path(filepath) if filepath else _user_config_path()
        if path.exists():
            try:
                with path.open("r", encoding="utf-8") as f:
                    data = json.load(f)
                return cls.from_dict(data)
            except (json.JSONDecodeError, OSError, TypeError, ValueError, AttributeError):
                return replace(DEFAULT_SETTINGS)
        return replace(DEFAULT_SETTINGS)


def load_settings(filepath: Optional[str | os.PathLike] = None) -> Settings:
    # variables already in the environment are never overridden
    load_dotenv(Path.cwd() / ".env", override=False)
    load_dotenv(user_config_dir() / ".env", override=False)
    return Settings.load_from_file(filepath).with_env()


# defaults carry no credentials
DEFAULT_SETTINGS = Settings()
