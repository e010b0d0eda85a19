"""
Pipeline steps for turning a website into an Alai presentation.

Each streaming step wraps one :class:`pagedeck.core.session.SessionSpec`.
"""

from .create_slides import create_slides_step
from .create_variant import create_variant_step
from .generate_outline import generate_outline_step

__all__ = ["create_slides_step", "create_variant_step", "generate_outline_step"]
