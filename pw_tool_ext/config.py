"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Data Structure For Configuration
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Literal, Dict, Any, List, Optional, get_args

import dotenv

from constant.const_config import DEFAULT_TEST_ID_ATTRIBUTE, ENV_FILE, ENV_PREFIX, LOG_FILE

logger = logging.getLogger(__name__)

EngineType = Literal["chromium", "firefox", "webkit"]
WaitType = Literal["domReady", "load", "networkIdle"]
VerbosityType = Literal["silent", "normal", "verbose"]
CapabilityType = Literal["core", "testing"]


@dataclass
class BrowserConfig:
    engine: EngineType = "chromium"
    headless: bool = True
    slowMoMs: int = 0
    viewport: Dict[str, int] = field(default_factory=lambda: {"width": 1366, "height": 768})
    locale: str = "en-US"


@dataclass
class WaitDefaults:
    navigate: Dict[str, Any] = field(default_factory=lambda: {"type": "domReady", "timeoutMs": 10000})
    networkIdleTimeoutMs: int = 5000


@dataclass
class TestingConfig:
    __test__ = False

    testIdAttributeName: str = DEFAULT_TEST_ID_ATTRIBUTE


@dataclass
class LoggingConfig:
    verbosity: VerbosityType = "normal"
    logFile: str = LOG_FILE


@dataclass
class AppConfig:
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    waits: WaitDefaults = field(default_factory=WaitDefaults)
    testing: TestingConfig = field(default_factory=TestingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    capabilities: List[str] = field(default_factory=lambda: ["core", "testing"])


# ---------- env overrides ----------

def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be a boolean, got '{raw}'")


def _parse_choice(name: str, raw: str, choices: tuple) -> str:
    value = raw.strip()
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got '{raw}'")
    return value


def parse_capabilities(raw: str) -> List[str]:
    caps = [c.strip() for c in raw.split(",") if c.strip()]
    for cap in caps:
        _parse_choice(f"{ENV_PREFIX}CAPABILITIES", cap, get_args(CapabilityType))
    return caps


def apply_env_overrides(cfg: AppConfig, environ: Optional[Dict[str, str]] = None) -> AppConfig:
    env = os.environ if environ is None else environ

    raw = env.get(f"{ENV_PREFIX}BROWSER")
    if raw is not None:
        cfg.browser.engine = _parse_choice(f"{ENV_PREFIX}BROWSER", raw, get_args(EngineType))
    raw = env.get(f"{ENV_PREFIX}HEADLESS")
    if raw is not None:
        cfg.browser.headless = _parse_bool(f"{ENV_PREFIX}HEADLESS", raw)
    raw = env.get(f"{ENV_PREFIX}SLOW_MO_MS")
    if raw is not None:
        try:
            cfg.browser.slowMoMs = int(raw)
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}SLOW_MO_MS must be an integer, got '{raw}'")
    raw = env.get(f"{ENV_PREFIX}TEST_ID_ATTRIBUTE")
    if raw is not None:
        if not raw.strip():
            raise ValueError(f"{ENV_PREFIX}TEST_ID_ATTRIBUTE must not be empty")
        cfg.testing.testIdAttributeName = raw.strip()
    raw = env.get(f"{ENV_PREFIX}CAPABILITIES")
    if raw is not None:
        cfg.capabilities = parse_capabilities(raw)
    raw = env.get(f"{ENV_PREFIX}LOG_VERBOSITY")
    if raw is not None:
        cfg.logging.verbosity = _parse_choice(f"{ENV_PREFIX}LOG_VERBOSITY", raw, get_args(VerbosityType))
    return cfg


def load_app_config(env_file: Optional[str] = None) -> AppConfig:
    """Defaults, then .env, then process environment (process environment wins over .env)."""
    dotenv.load_dotenv(dotenv_path=env_file or ENV_FILE, override=False)
    cfg = apply_env_overrides(AppConfig())
    logger.info(f'browser: {cfg.browser.engine}, headless: {cfg.browser.headless}, '
                f'testIdAttributeName: {cfg.testing.testIdAttributeName}, capabilities: {cfg.capabilities}')
    return cfg


def log_level_for(verbosity: str) -> int:
    return {"silent": logging.WARNING, "normal": logging.INFO, "verbose": logging.DEBUG}.get(verbosity, logging.INFO)
