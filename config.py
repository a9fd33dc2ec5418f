"""
CORS Scanner Configuration Module
Centralized configuration using Pydantic Settings with YAML and .env support.
"""

from pathlib import Path
from typing import Annotated, Optional, List, Tuple, Any, Literal
from functools import lru_cache

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


# Base directory
BASE_DIR = Path(__file__).parent.resolve()
CONFIG_FILE = BASE_DIR / "config.yaml"
ENV_FILE = BASE_DIR / ".env"

# Delimiter used on the command line for header and cookie pairs
PAIR_DELIMITER = "~~~"


def split_pair(value: str, what: str) -> Tuple[str, str]:
    """Split a 'left~~~right' string into a (left, right) tuple"""
    parts = value.split(PAIR_DELIMITER)
    if len(parts) != 2 or not parts[0].strip():
        raise ValueError(
            f"{what} must be given as 'name{PAIR_DELIMITER}value', got {value!r}"
        )
    return parts[0].strip(), parts[1].strip()


class ScanConfig(BaseSettings):
    """Scan settings shared read-only by every worker"""
    threads: int = Field(default=10, ge=1, description="Number of concurrent workers")
    timeout: float = Field(default=10, gt=0, description="Per-request timeout in seconds")
    proxy: Optional[str] = Field(default=None, description="Proxy address (host:port or URL)")
    user_agent: Optional[str] = Field(
        default=None,
        description="Fixed User-Agent; a random browser string is used when unset"
    )
    referer: Optional[str] = Field(default=None, description="Referer header value")
    # NoDecode: the environment form is 'name~~~value', not JSON
    custom_header: Annotated[Optional[Tuple[str, str]], NoDecode] = Field(
        default=None, description="Extra request header as (name, value)"
    )
    cookies: Annotated[List[Tuple[str, str]], NoDecode] = Field(
        default_factory=list,
        description="(domain substring, 'a=1; b=2') cookie rules"
    )
    verbose: bool = Field(default=False, description="Print every result and network error")

    model_config = SettingsConfigDict(env_prefix="CORSSCAN_SCAN_", frozen=True)

    @field_validator("custom_header", mode="before")
    @classmethod
    def _parse_custom_header(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_pair(value, "custom header") if value else None
        return value

    @field_validator("cookies", mode="before")
    @classmethod
    def _parse_cookies(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",") if part.strip()]
        if isinstance(value, (list, tuple)):
            return [
                split_pair(item, "cookie rule") if isinstance(item, str) else item
                for item in value
            ]
        return value

    @field_validator("proxy", "user_agent", "referer", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def proxy_url(self) -> Optional[str]:
        """Proxy as a URL; a bare host:port is treated as an HTTP proxy"""
        if not self.proxy:
            return None
        if "://" in self.proxy:
            return self.proxy
        return f"http://{self.proxy}"


class AppConfig(BaseSettings):
    """Main configuration class"""
    scan: ScanConfig = Field(default_factory=ScanConfig)

    # Output
    csv_name: Optional[Path] = Field(default=None, description="CSV output file")

    # Global settings
    version: str = "1.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", description="Logging level"
    )
    log_file: Optional[Path] = Field(default=None, description="Log file path")
    structured_logs: bool = Field(default=False, description="Emit JSON log lines")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_prefix="CORSSCAN_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    @classmethod
    def from_yaml(cls, config_path: Path = CONFIG_FILE) -> "AppConfig":
        """Load configuration from YAML file"""
        config_path = Path(config_path)
        if not config_path.exists():
            return cls()

        with open(config_path, "r") as f:
            yaml_config = yaml.safe_load(f) or {}

        return cls(**yaml_config)

    def to_yaml(self, config_path: Path = CONFIG_FILE) -> None:
        """Save configuration to YAML file"""
        config_dict = self.model_dump(exclude_none=True)

        # Convert Path objects and tuples to YAML-friendly values
        def convert(obj: Any) -> Any:
            if isinstance(obj, Path):
                return str(obj)
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert(v) for v in obj]
            return obj

        config_dict = convert(config_dict)

        with open(config_path, "w") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

    def with_scan(self, **overrides: Any) -> "AppConfig":
        """Copy with scan settings overridden, re-validating the new values"""
        merged = self.scan.model_dump()
        merged.update({k: v for k, v in overrides.items() if v is not None})
        return self.model_copy(update={"scan": ScanConfig(**merged)})


@lru_cache()
def get_config() -> AppConfig:
    """Get singleton configuration instance"""
    if CONFIG_FILE.exists():
        return AppConfig.from_yaml(CONFIG_FILE)
    return AppConfig()
