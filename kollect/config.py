import os
import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

_ENV_PREFIX = 'KOLLECT_'


@dataclass(frozen=True)
class Settings:
    """library-wide defaults for serialization and rounding"""
    json_separators: Tuple[str, str] = (',', ':')
    pretty_indent: int = 4
    json_depth: int = 512
    percentage_precision: int = 2
    escape_when_casting_to_string: bool = False
    log_level: str = 'WARNING'

    def __post_init__(self):
        if self.json_depth < 1:
            raise ValueError("json_depth must be at least 1")
        if self.pretty_indent < 0:
            raise ValueError("pretty_indent cannot be negative")
        if self.percentage_precision < 0:
            raise ValueError("percentage_precision cannot be negative")
        if len(self.json_separators) != 2:
            raise ValueError("json_separators must be an (item, key) pair")
        if logging.getLevelName(self.log_level.upper()) == f"Level {self.log_level.upper()}":
            raise ValueError(f"unknown log level '{self.log_level}'")

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> 'Settings':
        """build settings from KOLLECT_* variables, falling back to the defaults"""
        env = os.environ if environ is None else environ
        overrides = {}
        if f'{_ENV_PREFIX}JSON_DEPTH' in env:
            overrides['json_depth'] = int(env[f'{_ENV_PREFIX}JSON_DEPTH'])
        if f'{_ENV_PREFIX}PRETTY_INDENT' in env:
            overrides['pretty_indent'] = int(env[f'{_ENV_PREFIX}PRETTY_INDENT'])
        if f'{_ENV_PREFIX}PERCENTAGE_PRECISION' in env:
            overrides['percentage_precision'] = int(env[f'{_ENV_PREFIX}PERCENTAGE_PRECISION'])
        if f'{_ENV_PREFIX}ESCAPE' in env:
            overrides['escape_when_casting_to_string'] = env[f'{_ENV_PREFIX}ESCAPE'].strip().lower() in ('1', 'true', 'yes', 'on')
        if f'{_ENV_PREFIX}LOG_LEVEL' in env:
            overrides['log_level'] = env[f'{_ENV_PREFIX}LOG_LEVEL']
        return cls(**overrides)


settings = Settings()


def configure(**overrides) -> Settings:
    """replace the active settings; unknown names raise TypeError"""
    global settings
    settings = replace(settings, **overrides)
    logger.debug(f"settings updated: {overrides}")
    return settings


def reset() -> Settings:
    """restore the default settings"""
    global settings
    settings = Settings()
    return settings


def get_settings() -> Settings:
    return settings


def configure_logging(level: Optional[str] = None) -> None:
    """minimal logging setup for scripts and test runs"""
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING),
                        format='%(asctime)s - %(name)s - %(message)s')
    logging.getLogger('kollect').setLevel(level_name)
