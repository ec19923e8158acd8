"""Live content surface and stage view."""

from sitestage.stage.surface import ContentSurface, DefaultRenderer, SurfaceContext
from sitestage.stage.view import StageView

__all__ = ["ContentSurface", "DefaultRenderer", "StageView", "SurfaceContext"]
