"""Configuration module — exports Settings and the YAML-aware loaders."""

from docprompt.config.loader import build_settings, load_config
from docprompt.config.settings import Settings

__all__ = ["Settings", "build_settings", "load_config"]
