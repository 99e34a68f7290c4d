"""
corcovado Config - Runtime Configuration

Property-based configuration for matrix behavior that is not part of any
function signature: default dtype, repr preview size and debug-only
iterator checks.

Environment variables (read once at import):
    CORCOVADO_DEFAULT_DTYPE     dtype used when none is given
    CORCOVADO_CHECK_ITERATORS   "1"/"true"/"yes" enables iterator checks
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from ._dtypes import normalize_dtype

logger = logging.getLogger("corcovado.config")


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class DisplayConfig:
    """Configuration for repr output."""
    threshold: int = 36            # Elements above which repr is summarized
    edgeitems: int = 3             # Elements shown at each end when summarized


@dataclass
class DebugConfig:
    """Configuration for debug-only checks."""
    check_iterators: bool = False  # Detect iterators outliving a reallocation


@dataclass
class DefaultsConfig:
    """Configuration for construction defaults."""
    dtype: str = 'float64'

    def __post_init__(self):
        self.dtype = normalize_dtype(self.dtype)


# =============================================================================
# Global Configuration Manager
# =============================================================================

class CorcoConfig:
    """
    Global configuration manager for corcovado.

    Provides thread-local configuration with context manager support.

    Example:
        # Global configuration
        corcovado.config.debug.check_iterators = True

        # Local configuration (context manager)
        with corcovado.config.local(defaults=DefaultsConfig(dtype='int32')):
            m = Matrix(2, 2)    # int32
        # Back to global config
    """

    _SECTIONS = ("display", "debug", "defaults")

    def __init__(self):
        self._global_display = DisplayConfig()
        self._global_debug = DebugConfig()
        self._global_defaults = DefaultsConfig()

        # Thread-local storage for context overrides
        self._local = threading.local()

        self._callbacks: Dict[str, List[Callable]] = {name: [] for name in self._SECTIONS}

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def display(self) -> DisplayConfig:
        """Get display configuration."""
        if getattr(self._local, "display", None) is not None:
            return self._local.display
        return self._global_display

    @display.setter
    def display(self, value: DisplayConfig):
        self._global_display = value
        self._notify("display", value)

    @property
    def debug(self) -> DebugConfig:
        """Get debug configuration."""
        if getattr(self._local, "debug", None) is not None:
            return self._local.debug
        return self._global_debug

    @debug.setter
    def debug(self, value: DebugConfig):
        self._global_debug = value
        self._notify("debug", value)

    @property
    def defaults(self) -> DefaultsConfig:
        """Get construction defaults."""
        if getattr(self._local, "defaults", None) is not None:
            return self._local.defaults
        return self._global_defaults

    @defaults.setter
    def defaults(self, value: DefaultsConfig):
        self._global_defaults = value
        self._notify("defaults", value)

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def check_iterators(self) -> bool:
        """Whether stale iterators are detected."""
        return self.debug.check_iterators

    @check_iterators.setter
    def check_iterators(self, value: bool):
        self._global_debug.check_iterators = bool(value)

    @property
    def default_dtype(self) -> str:
        """dtype used when a constructor is given none."""
        return self.defaults.dtype

    @default_dtype.setter
    def default_dtype(self, value):
        self._global_defaults.dtype = normalize_dtype(value)

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Section overrides (display, debug, defaults)

        Raises:
            KeyError: If an unknown section is named
        """
        for key in kwargs:
            if key not in self._SECTIONS:
                raise KeyError(f"Unknown config section: {key}")
        return _LocalConfigContext(self, **kwargs)

    def _set_local(self, **kwargs):
        for key, value in kwargs.items():
            if value is not None:
                setattr(self._local, key, value)

    def _clear_local(self, keys: List[str]):
        for key in keys:
            if hasattr(self._local, key):
                setattr(self._local, key, None)

    # -------------------------------------------------------------------------
    # Callback Registration
    # -------------------------------------------------------------------------

    def on_change(self, config_name: str, callback: Callable):
        """
        Register callback for configuration changes.

        Args:
            config_name: Name of section ("display", "debug", "defaults")
            callback: Function called with the new section value
        """
        if config_name in self._callbacks:
            self._callbacks[config_name].append(callback)

    def _notify(self, config_name: str, value: Any):
        logger.debug("config section %r replaced: %r", config_name, value)
        for callback in self._callbacks.get(config_name, []):
            callback(value)

    # -------------------------------------------------------------------------
    # Environment / Reset
    # -------------------------------------------------------------------------

    def load_env(self, environ=None):
        """Apply CORCOVADO_* environment variables to the global config."""
        environ = os.environ if environ is None else environ

        dtype = environ.get('CORCOVADO_DEFAULT_DTYPE')
        if dtype:
            try:
                self._global_defaults.dtype = normalize_dtype(dtype)
            except (ValueError, TypeError):
                logger.warning("Ignoring invalid CORCOVADO_DEFAULT_DTYPE=%r; keeping %s",
                               dtype, self._global_defaults.dtype)
            else:
                logger.info("Default dtype set to %s from environment", dtype)

        flag = environ.get('CORCOVADO_CHECK_ITERATORS', '')
        if flag.lower() in ('1', 'true', 'yes'):
            self._global_debug.check_iterators = True
            logger.info("Iterator checks enabled from environment")

    def reset(self):
        """Reset all configurations to defaults."""
        self._global_display = DisplayConfig()
        self._global_debug = DebugConfig()
        self._global_defaults = DefaultsConfig()

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "display": {
                "threshold": self.display.threshold,
                "edgeitems": self.display.edgeitems,
            },
            "debug": {
                "check_iterators": self.debug.check_iterators,
            },
            "defaults": {
                "dtype": self.defaults.dtype,
            },
        }

    def __repr__(self) -> str:
        return f"CorcoConfig({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: CorcoConfig, **kwargs):
        self._config = config
        self._kwargs = kwargs
        self._keys = list(kwargs.keys())

    def __enter__(self):
        self._config._set_local(**self._kwargs)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._clear_local(self._keys)
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = CorcoConfig()
config.load_env()


def get_config() -> CorcoConfig:
    """Get the global configuration instance."""
    return config


def set_check_iterators(enabled: bool = True):
    """Enable or disable stale-iterator detection globally."""
    config.check_iterators = enabled


def set_default_dtype(dtype):
    """Set the dtype used when constructors are given none."""
    config.default_dtype = dtype


__all__ = [
    "DisplayConfig",
    "DebugConfig",
    "DefaultsConfig",
    "CorcoConfig",
    "config",
    "get_config",
    "set_check_iterators",
    "set_default_dtype",
]
