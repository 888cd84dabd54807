# ==============================================================================
# GEOASSETS - CONFIGURATION MODULE
# ==============================================================================
# Configuration management for the asset provisioner.
#
# This module handles:
#   - Loading/saving configuration from JSON file
#   - Default values for all settings
#   - Snapshotting settings into an immutable AssetSettings object that is
#     handed to the provisioner and resolver at construction time
#
# Configuration is stored in: <user data dir>/config.json
#
# Usage:
#   from geoassets.core.config import Config
#   config = Config()
#   config.load()
#   config.use_official_assets = False
#   config.save()
#   settings = config.to_settings()
# ==============================================================================

import os
import json
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any

from .paths import Paths


logger = logging.getLogger(__name__)


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================
# These are used when no config file exists or when values are missing.

DEFAULT_CONFIG = {
    # -------------------------------------------------------------------------
    # PATHS
    # -------------------------------------------------------------------------
    # Directory of the read-only asset bundle ("" = Paths.get_bundle_dir())
    "bundle_path": "",

    # Prefix prepended to every entry name inside the bundle
    "bundle_prefix": "",

    # App-private extraction directory ("" = Paths default)
    "internal_assets_path": "",

    # User-visible extraction directory ("" = Paths default)
    "external_assets_path": "",

    # -------------------------------------------------------------------------
    # PROVISIONING
    # -------------------------------------------------------------------------
    # Follow the official channel for replaceable resources
    "use_official_assets": True,

    # Filename always served straight from the bundle by the resolver
    "reserved_bundle_name": "index.html",

    # Hosts that ship their own assets turn provisioning off entirely
    "provisioning_enabled": True,

    # -------------------------------------------------------------------------
    # ADVANCED
    # -------------------------------------------------------------------------
    # Enable debug logging
    "debug_mode": False,
}


# ==============================================================================
# SETTINGS SNAPSHOT
# ==============================================================================
@dataclass(frozen=True)
class AssetSettings:
    """
    Immutable settings passed into the provisioner and resolver.

    Attributes:
        bundle_path:          Directory or zip file holding the bundle
        bundle_prefix:        Prefix for every bundle entry name
        internal_assets_path: App-private extraction directory
        external_assets_path: User-visible extraction directory
        use_official_assets:  Official channel for replaceable resources
        reserved_bundle_name: Filename served directly from the bundle
        provisioning_enabled: False to skip provisioning altogether
        debug_mode:           Verbose logging
    """
    bundle_path: str
    internal_assets_path: str
    external_assets_path: str
    bundle_prefix: str = ""
    use_official_assets: bool = True
    reserved_bundle_name: str = "index.html"
    provisioning_enabled: bool = True
    debug_mode: bool = False

    def directory_for(self, replaceable: bool) -> str:
        """Extraction directory for a resource of the given kind."""
        if replaceable:
            return self.external_assets_path
        return self.internal_assets_path


# ==============================================================================
# CONFIGURATION CLASS
# ==============================================================================
class Config:
    """
    Configuration manager for GeoAssets.

    Settings are stored in a JSON file and can be accessed as properties
    on this object. Call to_settings() to get the immutable snapshot the
    rest of the package consumes.

    Example:
        >>> config = Config("/tmp/config.json")
        >>> config.load()
        False
        >>> config.use_official_assets = False
        >>> config.save()
        True
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: Path to config file. If None, uses Paths default.
        """
        self.config_path = config_path or Paths.get_config_path()
        self.data: Dict[str, Any] = DEFAULT_CONFIG.copy()
        self._modified = False

    # -------------------------------------------------------------------------
    # LOADING AND SAVING
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """
        Load configuration from file.

        If the file doesn't exist or is invalid, defaults are used.
        Missing keys are filled with defaults; unknown keys are ignored.

        Returns:
            True if file was loaded, False if using defaults
        """
        if not os.path.isfile(self.config_path):
            logger.info("Config file not found, using defaults")
            return False

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Invalid config file: %s", e)
            return False
        except OSError as e:
            logger.error("Failed to load config: %s", e)
            return False

        if not isinstance(loaded, dict):
            logger.error("Invalid config file: top level must be an object")
            return False

        for key, value in loaded.items():
            if key in self.data:
                self.data[key] = value

        logger.info("Loaded config from %s", self.config_path)
        self._modified = False
        return True

    def save(self) -> bool:
        """
        Save configuration to file, creating the directory if needed.

        Returns:
            True if saved successfully
        """
        try:
            directory = os.path.dirname(self.config_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=4, sort_keys=True)
        except OSError as e:
            logger.error("Failed to save config: %s", e)
            return False

        logger.info("Saved config to %s", self.config_path)
        self._modified = False
        return True

    def reset_to_defaults(self):
        """Reset all settings to their default values."""
        self.data = DEFAULT_CONFIG.copy()
        self._modified = True

    @property
    def modified(self) -> bool:
        return self._modified

    # -------------------------------------------------------------------------
    # PROPERTY ACCESS
    # -------------------------------------------------------------------------

    @property
    def bundle_path(self) -> str:
        """Bundle location, falling back to the Paths default."""
        return self.data.get('bundle_path') or Paths.get_bundle_dir()

    @bundle_path.setter
    def bundle_path(self, value: str):
        self.data['bundle_path'] = value
        self._modified = True

    @property
    def bundle_prefix(self) -> str:
        return self.data.get('bundle_prefix', '')

    @bundle_prefix.setter
    def bundle_prefix(self, value: str):
        self.data['bundle_prefix'] = value
        self._modified = True

    @property
    def internal_assets_path(self) -> str:
        return self.data.get('internal_assets_path') or Paths.get_internal_assets_dir()

    @internal_assets_path.setter
    def internal_assets_path(self, value: str):
        self.data['internal_assets_path'] = value
        self._modified = True

    @property
    def external_assets_path(self) -> str:
        return self.data.get('external_assets_path') or Paths.get_external_assets_dir()

    @external_assets_path.setter
    def external_assets_path(self, value: str):
        self.data['external_assets_path'] = value
        self._modified = True

    @property
    def use_official_assets(self) -> bool:
        """Check if replaceable resources follow the official channel."""
        return bool(self.data.get('use_official_assets', True))

    @use_official_assets.setter
    def use_official_assets(self, value: bool):
        self.data['use_official_assets'] = bool(value)
        self._modified = True

    @property
    def reserved_bundle_name(self) -> str:
        return self.data.get('reserved_bundle_name', 'index.html')

    @reserved_bundle_name.setter
    def reserved_bundle_name(self, value: str):
        if not value or '/' in value or '\\' in value:
            raise ValueError("reserved_bundle_name must be a bare filename")
        self.data['reserved_bundle_name'] = value
        self._modified = True

    @property
    def provisioning_enabled(self) -> bool:
        return bool(self.data.get('provisioning_enabled', True))

    @provisioning_enabled.setter
    def provisioning_enabled(self, value: bool):
        self.data['provisioning_enabled'] = bool(value)
        self._modified = True

    @property
    def debug_mode(self) -> bool:
        """Check if debug mode is enabled."""
        return bool(self.data.get('debug_mode', False))

    @debug_mode.setter
    def debug_mode(self, value: bool):
        self.data['debug_mode'] = bool(value)
        self._modified = True

    # -------------------------------------------------------------------------
    # GENERIC ACCESS
    # -------------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access: config['key']"""
        return self.data[key]

    # -------------------------------------------------------------------------
    # SNAPSHOT
    # -------------------------------------------------------------------------

    def to_settings(self) -> AssetSettings:
        """
        Freeze the current values into an AssetSettings object.

        Empty path settings are resolved to their Paths defaults here,
        so the snapshot always carries concrete directories.
        """
        return AssetSettings(
            bundle_path=self.bundle_path,
            bundle_prefix=self.bundle_prefix,
            internal_assets_path=self.internal_assets_path,
            external_assets_path=self.external_assets_path,
            use_official_assets=self.use_official_assets,
            reserved_bundle_name=self.reserved_bundle_name,
            provisioning_enabled=self.provisioning_enabled,
            debug_mode=self.debug_mode,
        )
