"""
Pipeline package for PageDeck.

This package contains the website-to-presentation coordinator and its steps.
"""

from .coordinator import WebsiteDeckPipeline, create_presentation_from_website

__all__ = ["WebsiteDeckPipeline", "create_presentation_from_website"]
