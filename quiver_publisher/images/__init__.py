"""Image handling for Quiver Publisher."""

from quiver_publisher.images.relocator import ImageRelocator

__all__ = ["ImageRelocator"]
