"""Typed settings built from the Hydra configuration tree."""

from dataclasses import dataclass, field
from typing import Optional

from limits import parse as parse_limit
from omegaconf import DictConfig, OmegaConf

from .errors import ConfigError


@dataclass(frozen=True)
class FetcherConfig:
    """Per-request fetch behaviour."""

    timeout: float = 15.0
    max_attempts: int = 3
    retry_delay: float = 1.0
    max_redirects: int = 5

    def __post_init__(self) -> None:
        if not (1 <= self.timeout <= 60):
            raise ConfigError("fetcher.timeout must be between 1 and 60 seconds")
        if self.max_attempts < 1:
            raise ConfigError("fetcher.max_attempts must be >= 1")
        if self.retry_delay < 0:
            raise ConfigError("fetcher.retry_delay must be >= 0")
        if self.max_redirects < 0:
            raise ConfigError("fetcher.max_redirects must be >= 0")


@dataclass(frozen=True)
class ExtractionConfig:
    """Which fetch variants the orchestrator tries, and in what order."""

    embed_first: bool = True
    oembed_fallback: bool = True


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 3000
    rate_limit: str = "100 per 15 minutes"

    def __post_init__(self) -> None:
        if not (0 < self.port < 65536):
            raise ConfigError("server.port must be between 1 and 65535")
        try:
            parse_limit(self.rate_limit)
        except ValueError as e:
            raise ConfigError(f"server.rate_limit is not a valid limit: {self.rate_limit!r}") from e


@dataclass(frozen=True)
class AppConfig:
    fetcher: FetcherConfig = field(default_factory=FetcherConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"
    urls: tuple[str, ...] = ()


def _section(cfg: DictConfig, name: str) -> dict:
    node = cfg.get(name)
    if node is None:
        return {}
    return OmegaConf.to_container(node, resolve=True)


def load_config(cfg: Optional[DictConfig] = None) -> AppConfig:
    """
    Convert a Hydra config into an AppConfig.

    Missing sections fall back to defaults; unknown keys are rejected.

    Raises:
        ConfigError: on unknown keys or out-of-range values
    """
    if cfg is None:
        return AppConfig()

    try:
        fetcher = FetcherConfig(**_section(cfg, "fetcher"))
        extraction = ExtractionConfig(**_section(cfg, "extraction"))
        server = ServerConfig(**_section(cfg, "server"))
    except TypeError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logging_section = _section(cfg, "logging")
    urls = cfg.get("urls") or []
    if isinstance(urls, str):
        urls = [urls]

    return AppConfig(
        fetcher=fetcher,
        extraction=extraction,
        server=server,
        log_level=str(logging_section.get("level", "INFO")).upper(),
        urls=tuple(str(u) for u in urls),
    )
