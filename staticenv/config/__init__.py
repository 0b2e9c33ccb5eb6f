"""
Configuration Management Module

Provides .env file discovery and loading.
"""

from .env_loader import find_env_file, load_env, read_env

__all__ = [
    "find_env_file",
    "load_env",
    "read_env",
]
