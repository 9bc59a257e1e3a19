from .asset import normalize_asset
from .page import normalize_page
from .section import normalize_section
