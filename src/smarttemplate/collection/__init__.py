from .render_collection import RenderCollection

__all__ = ["RenderCollection"]
