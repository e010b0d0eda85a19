"""
Page content extraction.
"""

from .firecrawl import FirecrawlScraper, scrape_website

__all__ = ["FirecrawlScraper", "scrape_website"]
