import os
import sys
import tomllib
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

DEFAULT_CONFIG_PATH = "checkers.toml"


@dataclass
class SearchConfig:
    depth: int = 4
    seed: Optional[int] = None  # None means unseeded tie-breaking


@dataclass
class ArenaConfig:
    games: int = 10
    max_plies: int = 200
    red_depth: int = 2
    black_depth: int = 2
    red_agent: str = "minimax"  # "minimax" or "random"
    black_agent: str = "minimax"


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    arena: ArenaConfig = field(default_factory=ArenaConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = DEFAULT_CONFIG_PATH) -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "arena", "server"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg


def load_config() -> Config:
    """
    Load the TOML file named by CHECKERS_CONFIG_TOML (default checkers.toml),
    then apply the CHECKERS_SEARCH_DEPTH and CHECKERS_LOG_LEVEL overrides.
    """
    cfg = Config.load_from_toml(os.environ.get("CHECKERS_CONFIG_TOML", DEFAULT_CONFIG_PATH))

    override_depth = os.environ.get("CHECKERS_SEARCH_DEPTH")
    if override_depth:
        cfg.search.depth = int(override_depth)

    override_level = os.environ.get("CHECKERS_LOG_LEVEL")
    if override_level:
        cfg.log_level = override_level.upper()
    return cfg


def configure_logging(level: str = "INFO"):
    """Replace loguru's default sink with a single stderr sink at `level`."""
    logger.remove()
    logger.add(sys.stderr, level=level)
