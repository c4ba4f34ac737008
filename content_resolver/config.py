"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ApiConfig: GraphQL endpoint and transport settings
- ResolverConfig: Resolution pipeline behaviour (recursion bound, horizon, enrichment)
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml

from .core.types import Instance
from .errors import ConfigError


DEFAULT_META_IMAGES: dict[str, str] = {
    "mathe": "mathematik.jpg",
    "nachhaltigkeit": "nachhaltigkeit.jpg",
    "biologie": "biologie.jpg",
    "chemie": "chemie.jpg",
    "informatik": "informatik.jpg",
    "lerntipps": "lerntipps.jpg",
    "default": "serlo.jpg",
}


@dataclass
class ApiConfig:
    """Configuration for the GraphQL transport.

    Attributes:
        endpoint: GraphQL endpoint URL (uses CONTENT_RESOLVER_ENDPOINT if empty)
        timeout_seconds: HTTP request timeout
        retries: Transport-level retry attempts (the pipeline itself never retries)
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    endpoint: str | None = "https://api.serlo.org/graphql"
    timeout_seconds: float = 20.0
    retries: int = 0
    trust_env: bool = True
    user_agent: str = "content-resolver/0.1"


@dataclass
class ResolverConfig:
    """Configuration for the resolution pipeline.

    Attributes:
        max_redirect_depth: Maximum number of recursive re-resolutions per request
        horizon_instance: The only instance that receives horizon recommendations
        horizon_count: Number of horizon entries to attach
        canonical_id_redirects: Redirect top-level `/123` lookups to the entity's alias
        enrich_links: Resolve internal `/123` links in content to aliases
        meta_image_base_url: Base URL that meta image file names are joined onto
        meta_images: Subject (first alias segment) to image file name
    """

    max_redirect_depth: int = 8
    horizon_instance: str = "de"
    horizon_count: int = 3
    canonical_id_redirects: bool = False
    enrich_links: bool = True
    meta_image_base_url: str = "https://de.serlo.org/_assets/img/meta/"
    meta_images: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_META_IMAGES))


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "resolver.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    api: ApiConfig = field(default_factory=ApiConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")
    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "api": {
            "endpoint": cfg.api.endpoint,
            "timeout_seconds": cfg.api.timeout_seconds,
            "retries": cfg.api.retries,
            "trust_env": cfg.api.trust_env,
            "user_agent": cfg.api.user_agent,
        },
        "resolver": {
            "max_redirect_depth": cfg.resolver.max_redirect_depth,
            "horizon_instance": cfg.resolver.horizon_instance,
            "horizon_count": cfg.resolver.horizon_count,
            "canonical_id_redirects": cfg.resolver.canonical_id_redirects,
            "enrich_links": cfg.resolver.enrich_links,
            "meta_image_base_url": cfg.resolver.meta_image_base_url,
            "meta_images": dict(cfg.resolver.meta_images),
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    try:
        cfg = AppConfig(
            api=ApiConfig(**data["api"]),
            resolver=ResolverConfig(**data["resolver"]),
            logging=LoggingConfig(**data["logging"]),
        )
    except TypeError as exc:
        raise ConfigError(f"Invalid config: {exc}") from exc

    if cfg.resolver.horizon_instance not in {item.value for item in Instance}:
        raise ConfigError(f"Unknown horizon instance: {cfg.resolver.horizon_instance}")
    if cfg.resolver.max_redirect_depth < 1:
        raise ConfigError("resolver.max_redirect_depth must be at least 1")
    return cfg


def get_endpoint(cfg: ApiConfig) -> str:
    """Get the GraphQL endpoint from inline config or environment variable."""
    endpoint = cfg.endpoint or os.getenv("CONTENT_RESOLVER_ENDPOINT")
    if not endpoint:
        raise ConfigError("No GraphQL endpoint configured (api.endpoint or CONTENT_RESOLVER_ENDPOINT)")
    return endpoint
