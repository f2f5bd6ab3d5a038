"""
Configuration module - environment-backed settings shared by the portfolio API.

Application settings subclass BaseAppSettings and extend collect_errors()
with their own required values.
"""

from common.config.base_settings import BaseAppSettings

__all__ = ["BaseAppSettings"]
