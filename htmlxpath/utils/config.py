"""
Configuration utility for htmlxpath.
"""

import copy
import json
import logging
import os
import threading
from typing import Dict, Any, Optional

from htmlxpath import __version__
from htmlxpath.dom.parser import BACKENDS, HTML5LIB

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HTMLXPATH_CONFIG"

DEFAULTS: Dict[str, Any] = {
    "parser": {
        "backend": HTML5LIB
    },
    "network": {
        "timeout": 30,
        "retries": 3,
        "backoff_factor": 0.5,
        "user_agent": f"htmlxpath/{__version__}",
        "max_workers": 4
    },
    "output": {
        "excerpt_length": 78
    }
}


def default_config_path() -> str:
    """
    Get the configuration file path.
    
    Returns:
        str: Value of HTMLXPATH_CONFIG if set, else ~/.htmlxpath/config.json
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return env_path
    return os.path.join(os.path.expanduser("~"), ".htmlxpath", "config.json")


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


class Config:
    """Configuration manager backed by a JSON file."""
    
    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.
        
        Args:
            config_path: Path to the config file
        """
        self.config_path = config_path or default_config_path()
        self.config: Dict[str, Any] = {}
        self._lock = threading.Lock()
        
        self.load()
        
        logger.debug(f"Configuration initialized (config_path: {self.config_path})")
    
    def load(self) -> None:
        """Load configuration from file, layered over the defaults."""
        self._set_defaults()
        if not os.path.exists(self.config_path):
            logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
            return
        
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration from {self.config_path}: {e}")
            return
        
        if not isinstance(loaded, dict):
            logger.error(f"Ignoring configuration in {self.config_path}: top level is not an object")
            return
        
        with self._lock:
            _merge(self.config, loaded)
        self._validate()
        logger.debug(f"Configuration loaded from {self.config_path}")
    
    def _validate(self) -> None:
        """Replace settings the package cannot use with their defaults."""
        backend = self.get("parser.backend")
        if backend not in BACKENDS:
            logger.error(f"Unknown parser.backend {backend!r} in {self.config_path}, "
                         f"using {DEFAULTS['parser']['backend']!r}")
            self.set("parser.backend", DEFAULTS["parser"]["backend"])
    
    def save(self) -> None:
        """Save configuration to file."""
        with self._lock:
            config_copy = copy.deepcopy(self.config)
        
        config_dir = os.path.dirname(self.config_path)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)
        
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(config_copy, f, indent=4)
        
        logger.debug(f"Configuration saved to {self.config_path}")
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.
        
        Args:
            key: Configuration key (can be nested using dots, e.g. 'network.timeout')
            default: Default value if key doesn't exist
            
        Returns:
            Any: Configuration value or default
        """
        with self._lock:
            parts = key.split('.')
            config = self.config
            
            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return default
                config = config[part]
            
            return config.get(parts[-1], default)
    
    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.
        
        Args:
            key: Configuration key (can be nested using dots, e.g. 'parser.backend')
            value: Configuration value
        """
        with self._lock:
            parts = key.split('.')
            config = self.config
            
            for part in parts[:-1]:
                if not isinstance(config.get(part), dict):
                    config[part] = {}
                config = config[part]
            
            config[parts[-1]] = value
    
    def remove(self, key: str) -> bool:
        """
        Remove a configuration value.
        
        Args:
            key: Configuration key
            
        Returns:
            bool: True if key was removed
        """
        with self._lock:
            parts = key.split('.')
            config = self.config
            
            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return False
                config = config[part]
            
            if parts[-1] in config:
                del config[parts[-1]]
                return True
            return False
    
    def get_all(self) -> Dict[str, Any]:
        """Get a copy of all configuration values."""
        with self._lock:
            return copy.deepcopy(self.config)
    
    def _set_defaults(self) -> None:
        with self._lock:
            self.config = copy.deepcopy(DEFAULTS)


_default_config: Optional[Config] = None
_default_lock = threading.Lock()


def get_config() -> Config:
    """Return the process-wide configuration, loading it on first use."""
    global _default_config
    with _default_lock:
        if _default_config is None:
            _default_config = Config()
        return _default_config


def set_config(config: Optional[Config]) -> None:
    """Replace the process-wide configuration (None reloads on next use)."""
    global _default_config
    with _default_lock:
        _default_config = config
