"""
Load assign/prefix/suffix declarations with ``${NAME}`` interpolation into the environment.
"""

from .config import LoaderConfig, load_config
from .engine import DeclarationEngine
from .env import load_env_file

__all__ = ["DeclarationEngine", "LoaderConfig", "load_config", "load_env_file"]
