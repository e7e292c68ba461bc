"""Configuration management."""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from wiki_nearby.core.scoring import CurationPolicy


@dataclass
class WikipediaConfig:
    """Wikipedia API settings."""
    base_url: str = "https://en.wikipedia.org"
    timeout: float = 30.0
    user_agent: str = "wiki-nearby/0.1 (https://github.com/wiki-nearby/wiki-nearby)"
    geosearch_limit: int = 50
    nearcoord_limit: int = 50


@dataclass
class CurationConfig:
    """Curation policy settings."""
    min_extract_length: int = 280
    extract_cap: int = 1200
    extract_weight: float = 0.1
    thumbnail_boost: float = 200.0
    missing_distance: float = 999999.0
    max_results: int = 30
    max_concurrent_enrichment: int = 8
    exclude_flagged_disambiguation: bool = False

    def to_policy(self) -> CurationPolicy:
        return CurationPolicy(**{f.name: getattr(self, f.name) for f in fields(CurationPolicy)})


@dataclass
class LocationConfig:
    """Fallback location settings."""
    # Times Square, used when no coordinate is given
    default_latitude: float = 40.7580
    default_longitude: float = -73.9855
    default_radius_miles: float = 0.5


@dataclass
class PathsConfig:
    """Path settings."""
    bookmarks_file: Path = Path("bookmarks.yaml")


@dataclass
class Settings:
    """Application settings."""

    wikipedia: WikipediaConfig = field(default_factory=WikipediaConfig)
    curation: CurationConfig = field(default_factory=CurationConfig)
    location: LocationConfig = field(default_factory=LocationConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @property
    def policy(self) -> CurationPolicy:
        return self.curation.to_policy()

    @property
    def bookmarks_file(self) -> Path:
        return self.paths.bookmarks_file


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)
    settings = Settings()

    if "wikipedia" in config:
        for key, value in config["wikipedia"].items():
            setattr(settings.wikipedia, key, value)

    if "curation" in config:
        for key, value in config["curation"].items():
            setattr(settings.curation, key, value)

    if "location" in config:
        for key, value in config["location"].items():
            setattr(settings.location, key, value)

    if "paths" in config:
        for key, value in config["paths"].items():
            setattr(settings.paths, key, Path(value))

    # Environment wins over YAML
    base_url = os.getenv("WIKI_NEARBY_BASE_URL")
    if base_url:
        settings.wikipedia.base_url = base_url

    user_agent = os.getenv("WIKI_NEARBY_USER_AGENT")
    if user_agent:
        settings.wikipedia.user_agent = user_agent

    return settings
