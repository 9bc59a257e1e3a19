from .page import Page
from .section import Section
from .asset import Asset

__all__ = ["Page", "Section", "Asset"]
