"""
Wire schemas for records exchanged with Alai.
"""

from .slides import SlideDraft, SlideOutline

__all__ = ["SlideDraft", "SlideOutline"]
