"""Configuration package for the Nivesh Advisor service."""

from .settings import AppSettings, get_settings

__all__ = ["AppSettings", "get_settings"]
