import logging
import logging.handlers
import os
import sys
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, validator

BASE = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# ---------------- Logging ----------------


def get_logger(name="identicon", log_file=None):
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    fmt = logging.Formatter(
        '{"ts":"%(asctime)s","level":"%(levelname)s","step":"%(name)s","msg":"%(message)s"}'
    )
    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(fmt)
    logger.addHandler(sh)
    logger.propagate = False
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=5)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
    return logger


log = get_logger("identicon")

# ---------------- Config Models ----------------


def _is_hex_color(value: str) -> bool:
    v = value.lstrip("#")
    if len(v) != 6:
        return False
    try:
        int(v, 16)
    except ValueError:
        return False
    return True


class RenderCfg(BaseModel):
    default_screen_width: int = 1080
    font_path: Optional[str] = None
    letter_color: str = "auto"

    @validator("default_screen_width")
    def validate_screen_width(cls, v):
        if v <= 0:
            raise ValueError("default_screen_width must be positive")
        return v

    @validator("letter_color")
    def validate_letter_color(cls, v):
        if v != "auto" and not _is_hex_color(v):
            raise ValueError("letter_color must be 'auto' or a #RRGGBB colour")
        return v


class PaletteCfg(BaseModel):
    candy: List[str] = Field(default_factory=list)
    source: Optional[str] = None

    @validator("candy", each_item=True)
    def validate_candy(cls, v):
        if not _is_hex_color(v):
            raise ValueError(f"Invalid candy colour: {v}")
        return v


class OutputCfg(BaseModel):
    dir: str = "identicons"
    format: str = "png"


class LoggingCfg(BaseModel):
    level: str = "INFO"
    file: Optional[str] = None


class IdenticonCfg(BaseModel):
    render: RenderCfg = Field(default_factory=RenderCfg)
    palette: PaletteCfg = Field(default_factory=PaletteCfg)
    output: OutputCfg = Field(default_factory=OutputCfg)
    logging: LoggingCfg = Field(default_factory=LoggingCfg)


def load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML at {path} must be a mapping/object.")
    return data


def _config_path() -> Optional[str]:
    override = os.environ.get("IDENTICON_CONFIG")
    if override:
        return override
    for name in ("identicon.yaml", "identicon.example.yaml"):
        path = os.path.join(BASE, "conf", name)
        if os.path.exists(path):
            return path
    return None


def load_config(path: Optional[str] = None) -> IdenticonCfg:
    path = path or _config_path()
    if path is None:
        log.debug("No config file found, using built-in defaults")
        return IdenticonCfg()
    raw = load_yaml(path)

    # Relative palette sources resolve against the config file
    source = (raw.get("palette") or {}).get("source")
    if source and not os.path.isabs(source):
        raw["palette"]["source"] = os.path.join(os.path.dirname(os.path.abspath(path)), source)

    try:
        cfg = IdenticonCfg(**raw)
    except ValidationError as e:
        log.error(f"Config validation failed: {e}")
        raise
    return cfg


def configure_logging(cfg: IdenticonCfg) -> None:
    """Apply the configured level (and optional file) to the package loggers."""
    level = getattr(logging, cfg.logging.level.upper(), logging.INFO)
    if cfg.logging.file:
        os.makedirs(os.path.dirname(os.path.abspath(cfg.logging.file)), exist_ok=True)
    for name in list(logging.root.manager.loggerDict):
        if not (name == "identicon" or name.startswith("identicon.")):
            continue
        logger = get_logger(name)
        logger.setLevel(level)
        if cfg.logging.file and not any(
            isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
        ):
            fh = logging.handlers.RotatingFileHandler(
                cfg.logging.file, maxBytes=5_000_000, backupCount=5
            )
            fh.setFormatter(logger.handlers[0].formatter)
            logger.addHandler(fh)


# ---------------- Env ----------------


def load_env() -> dict:
    load_dotenv(os.path.join(BASE, ".env"))
    env = {k: v for k, v in os.environ.items()}
    return env
