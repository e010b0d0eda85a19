"""
Alai presentation service integration.
"""

from .client import AlaiClient

__all__ = ["AlaiClient"]
