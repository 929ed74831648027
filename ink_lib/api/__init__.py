"""API layer for drawing-surface integration.

StrokeService wraps the geometry engine with element-store semantics:
finishing pen strokes, erasing paths, hit testing and trimming.

Example usage::

    from ink_lib.api import StrokeService

    service = StrokeService()
    element = service.finish_stroke(samples)
"""

from .services import StrokeService, path_element

__all__ = ['StrokeService', 'path_element']
