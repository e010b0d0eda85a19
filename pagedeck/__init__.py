"""
PageDeck - turn a single web page into a shareable Alai presentation

This package scrapes a page, drives the Alai presentation service through its
REST and websocket endpoints, and publishes a share link for the result.
"""

from .pipeline.coordinator import WebsiteDeckPipeline, create_presentation_from_website

__all__ = ["WebsiteDeckPipeline", "create_presentation_from_website"]

# Package version
__version__ = "1.0.0"
