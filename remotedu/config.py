"""
Configuration settings for remotedu.
Holds package defaults and loads the per-user directory server config.
"""
import json
import logging
import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

from .errors import ConfigError, NoCredentialsError


logger = logging.getLogger(__name__)

# Base directories
CONFIG_DIR = Path.home() / ".remotedu"

# Default files
DEFAULT_CONFIG_FILE = Path(os.environ.get("REMOTEDU_CONFIG", CONFIG_DIR / "config.json"))

# Logging settings
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_LEVEL = "warning"

# Directory server settings
LIST_ENDPOINT = "list"
GLOB_ENDPOINT = "glob"
USER_HEADER = "X-Remotedu-User"


class Config:
    """Directory server connection settings."""

    def __init__(
        self,
        endpoint: str,
        username: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.endpoint: str = endpoint.rstrip("/")
        self.username: Optional[str] = username
        self.token: Optional[str] = token
        self.timeout: Optional[float] = timeout

    @property
    def has_credentials(self) -> bool:
        return bool(self.token)


def load_config(path: Union[str, Path, None] = None) -> Config:
    """
    Load the directory server configuration from a JSON file.
    
    Args:
        path: Config file to read (DEFAULT_CONFIG_FILE if None)
        
    Returns:
        Loaded Config
        
    Raises:
        ConfigError: The file is missing, unreadable or invalid
        NoCredentialsError: The config is valid but has no token; the
            loaded Config is attached as ``config``
    """
    path = Path(path) if path is not None else DEFAULT_CONFIG_FILE
    logger.debug(f"Loading config from {path}")
    
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {path}")
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e.strerror}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in config file {path}: {e}")
    
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a JSON object")
    
    endpoint = data.get("endpoint")
    if not isinstance(endpoint, str) or not endpoint:
        raise ConfigError(f"config file {path}: 'endpoint' is required")
    if urlparse(endpoint).scheme not in ("http", "https"):
        raise ConfigError(f"config file {path}: endpoint must be an http(s) URL, got {endpoint!r}")
    
    username = data.get("username")
    if username is not None and not isinstance(username, str):
        raise ConfigError(f"config file {path}: 'username' must be a string")
    
    timeout = data.get("timeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError(f"config file {path}: 'timeout' must be a positive number")
    
    token = data.get("token")
    if token is not None and not isinstance(token, str):
        raise ConfigError(f"config file {path}: 'token' must be a string")
    tokenfile = data.get("tokenfile")
    if tokenfile is not None and not isinstance(tokenfile, str):
        raise ConfigError(f"config file {path}: 'tokenfile' must be a string")
    if not token and tokenfile:
        token = _read_token_file(Path(tokenfile).expanduser(), path)
    
    config = Config(endpoint, username=username, token=token or None, timeout=timeout)
    
    if not config.has_credentials:
        raise NoCredentialsError(f"no credentials in config file {path}", config=config)
    
    return config


def _read_token_file(token_path: Path, config_path: Path) -> Optional[str]:
    """Read a bearer token from a file; a missing file means no credentials."""
    try:
        return token_path.read_text().strip() or None
    except FileNotFoundError:
        logger.debug(f"Token file {token_path} named in {config_path} does not exist")
        return None
    except OSError as e:
        raise ConfigError(f"cannot read token file {token_path}: {e.strerror}")
