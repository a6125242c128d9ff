# engine/config.py
from dataclasses import dataclass, field
from typing import Dict, Optional
import os
import tomllib  # python >=3.11

# Material values in pawn-tenths, keyed by PieceKind name
PIECE_VALUES = {
    "PAWN": 10,
    "KNIGHT": 31,
    "BISHOP": 36,
    "ROOK": 63,
    "QUEEN": 88,
    "KING": 500,
}

@dataclass
class SearchConfig:
    depth: int = 3
    seed: Optional[int] = None  # None means a fresh random source per engine
    show_info: bool = True

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())
    jitter: bool = True  # add a random -1/0/+1 to split equal-material positions

@dataclass
class UIConfig:
    engine_name: str = "NibbleChess"
    engine_author: str = "NibbleChess developers"
    api_port: int = 8000
    output_path: Optional[str] = None  # CLI mirrors every printed board here

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "ui"):
            if section not in raw:
                continue
            target = getattr(cfg, section)
            for k, v in raw[section].items():
                if not hasattr(target, k):
                    continue
                if k == "piece_values":
                    # a partial table only overrides the kinds it names
                    v = {**PIECE_VALUES, **v}
                setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("ENGINE_CONFIG_TOML", "config.toml"))
# allow env override of depth and seed for quick debugging
try:
    override_depth = os.environ.get("ENGINE_SEARCH_DEPTH")
    if override_depth:
        CONFIG.search.depth = int(override_depth)
except ValueError:
    pass
try:
    override_seed = os.environ.get("ENGINE_SEED")
    if override_seed:
        CONFIG.search.seed = int(override_seed)
except ValueError:
    pass
