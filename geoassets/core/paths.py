# ==============================================================================
# GEOASSETS - PATH UTILITIES
# ==============================================================================
# Default locations, working for both a source checkout and a frozen exe.
#
# When running as a script:
#   - The bundle is the "assets" folder in the project directory
#
# When running as frozen exe (PyInstaller):
#   - The bundle is the "assets" folder inside _MEIPASS
#
# Extracted resources go to two places:
#   - internal: app-private data dir, never touched by the user
#   - external: a user-visible folder where custom databases may be dropped
#
# Usage:
#   from geoassets.core.paths import Paths
#   internal = Paths.get_internal_assets_dir()
# ==============================================================================

import os
import sys
from typing import Optional


class Paths:
    """
    Centralized path management for GeoAssets.

    User data (config, internal assets) is stored in:
    - Windows: %APPDATA%/GeoAssets/
    - Linux: ~/.config/GeoAssets/
    - macOS: ~/Library/Application Support/GeoAssets/

    None of these helpers create directories; the extractor creates its
    target directory when it first writes into it.
    """

    APP_NAME = "GeoAssets"

    BUNDLE_DIR_NAME = "assets"

    # Cache for computed paths
    _app_dir: Optional[str] = None
    _user_data_dir: Optional[str] = None

    @classmethod
    def is_frozen(cls) -> bool:
        """True if running as a PyInstaller executable."""
        return getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS')

    @classmethod
    def get_app_dir(cls) -> str:
        """
        Get the application directory.

        For script: The project root directory
        For exe: The directory containing the executable
        """
        if cls._app_dir is None:
            if cls.is_frozen():
                cls._app_dir = os.path.dirname(sys.executable)
            else:
                # This file is in geoassets/core/, so go up 3 levels
                cls._app_dir = os.path.dirname(
                    os.path.dirname(
                        os.path.dirname(os.path.abspath(__file__))
                    )
                )
        return cls._app_dir

    @classmethod
    def get_user_data_dir(cls) -> str:
        if cls._user_data_dir is None:
            if sys.platform == 'win32':
                base = os.environ.get('APPDATA', os.path.expanduser('~'))
                cls._user_data_dir = os.path.join(base, cls.APP_NAME)
            elif sys.platform == 'darwin':
                cls._user_data_dir = os.path.join(
                    os.path.expanduser('~'),
                    'Library', 'Application Support', cls.APP_NAME
                )
            else:
                base = os.environ.get('XDG_CONFIG_HOME',
                                      os.path.join(os.path.expanduser('~'), '.config'))
                cls._user_data_dir = os.path.join(base, cls.APP_NAME)
        return cls._user_data_dir

    @classmethod
    def get_config_path(cls) -> str:
        """Absolute path to config.json in the user data directory."""
        return os.path.join(cls.get_user_data_dir(), 'config.json')

    @classmethod
    def get_resource_path(cls, relative_path: str) -> str:
        """
        Get absolute path to a bundled resource.

        For PyInstaller, looks in _MEIPASS for bundled resources.

        Args:
            relative_path: Path relative to app directory
        """
        if cls.is_frozen():
            base = sys._MEIPASS
        else:
            base = cls.get_app_dir()

        return os.path.join(base, relative_path)

    @classmethod
    def get_bundle_dir(cls) -> str:
        """Directory holding the read-only asset bundle."""
        return cls.get_resource_path(cls.BUNDLE_DIR_NAME)

    @classmethod
    def get_internal_assets_dir(cls) -> str:
        """App-private extraction directory."""
        return os.path.join(cls.get_user_data_dir(), 'assets')

    @classmethod
    def get_external_assets_dir(cls) -> str:
        """
        User-visible extraction directory.

        Returns:
            Path to Documents/GeoAssets on Windows, ~/GeoAssets elsewhere
        """
        if sys.platform == 'win32':
            docs = os.path.join(os.path.expanduser('~'), 'Documents')
        else:
            docs = os.path.expanduser('~')

        return os.path.join(docs, cls.APP_NAME)
