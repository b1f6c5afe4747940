"""
Storage Layer.

This package handles loading and saving the client configuration file.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
