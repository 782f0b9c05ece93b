import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import toml

from .errors import MissingCredential

logger = logging.getLogger(__name__)

CREDENTIAL_VARIABLES = ("WTF_API_KEY", "GEMINI_API_KEY")

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_DEFAULT_MODEL = "gemini-2.0-flash"
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT = 30.0

CONFIG_DIR = os.path.expanduser("~/.config/wtf")

TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Config:
    """Settings for a single translation run."""

    api_key: str
    model: str
    base_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    verbose: bool = False
    log_dir: str = field(default_factory=lambda: os.path.join(CONFIG_DIR, "logs"))

    @property
    def provider(self) -> str:
        """'openai' when a custom base URL is configured, otherwise 'gemini'."""
        return "openai" if self.base_url else "gemini"

    @property
    def endpoint(self) -> str:
        return self.base_url or GEMINI_BASE_URL

    def __str__(self) -> str:
        """Return string representation of the configuration."""
        config_dict = self.__dict__.copy()
        config_dict["api_key"] = f"{self.api_key[:4]}...{self.api_key[-4:]}" if len(self.api_key) > 8 else "****"
        config_dict["provider"] = self.provider
        return str(config_dict)


def _load_config_from_file(path: str) -> Dict[str, Any]:
    """Loads configuration from the TOML file, if there is one."""
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r") as f:
            return toml.load(f)
    except (toml.TomlDecodeError, IOError) as e:
        logger.warning(f"Could not read config file at {path}: {e}")
        return {}


def _get_config(key: str, env: Mapping[str, str], file_config: Dict[str, Any], default: Any = None) -> Any:
    """
    Get a configuration value, prioritizing environment variables,
    then the config file, and finally a default value.

    Empty strings count as unset.
    """
    # 1. Check environment variable
    value = env.get(key)
    if value:
        return value

    # 2. Check config file, top level or any table
    value = file_config.get(key)
    if value not in (None, "") and not isinstance(value, dict):
        return value
    for section in file_config.values():
        if isinstance(section, dict) and section.get(key) not in (None, ""):
            return section[key]

    # 3. Return default
    return default


def _parse_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid WTF_TIMEOUT value {value!r}")
        return DEFAULT_TIMEOUT
    if timeout <= 0:
        logger.warning(f"Ignoring non-positive WTF_TIMEOUT value {value!r}")
        return DEFAULT_TIMEOUT
    return timeout


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY


def load_config(env: Optional[Mapping[str, str]] = None, config_file: Optional[str] = None) -> Config:
    """
    Build the Config for this run.

    Args:
        env: Environment mapping. Defaults to ``os.environ``.
        config_file: Path of a TOML file. Defaults to ``WTF_CONFIG_FILE``.
            ``~/.config/wtf/config.toml`` is only read when ``env`` is the
            process environment, so an injected mapping is self-contained.

    Raises:
        MissingCredential: If no API key is configured. Nothing touches the
            network before this check.
    """
    if env is None:
        env = os.environ
    if config_file is None:
        config_file = env.get("WTF_CONFIG_FILE")
    if config_file is None and env is os.environ:
        config_file = os.path.join(CONFIG_DIR, "config.toml")
    file_config = _load_config_from_file(config_file) if config_file else {}

    api_key = None
    for name in CREDENTIAL_VARIABLES:
        api_key = _get_config(name, env, file_config)
        if api_key:
            logger.debug(f"Using API key from {name}")
            break
    if not api_key:
        raise MissingCredential(CREDENTIAL_VARIABLES)

    base_url = _get_config("WTF_BASE_URL", env, file_config)
    if base_url:
        base_url = str(base_url).rstrip("/")
    default_model = OPENAI_DEFAULT_MODEL if base_url else GEMINI_DEFAULT_MODEL

    config = Config(
        api_key=str(api_key),
        model=str(_get_config("WTF_MODEL", env, file_config, default_model)),
        base_url=base_url or None,
        timeout=_parse_timeout(_get_config("WTF_TIMEOUT", env, file_config, DEFAULT_TIMEOUT)),
        verbose=_parse_bool(_get_config("WTF_VERBOSE", env, file_config, False)),
        log_dir=os.path.expanduser(str(_get_config("WTF_LOG_DIR", env, file_config, os.path.join(CONFIG_DIR, "logs")))),
    )
    logger.debug(f"Resolved configuration: {config}")
    return config
