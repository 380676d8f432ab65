"""Configuration management for RNA-seq meta-analysis."""

from rnaseq_meta.config.settings import Settings, get_settings, reset_settings

__all__ = ["Settings", "get_settings", "reset_settings"]
