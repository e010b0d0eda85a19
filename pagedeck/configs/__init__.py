"""
Configs components for PageDeck
"""

from .config import Config, config

__all__ = ["Config", "config"]
