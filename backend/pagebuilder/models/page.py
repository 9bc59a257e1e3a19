from pagebuilder.extensions import db
from .base import BaseModel

class Page(BaseModel):
    __tablename__ = "pages"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, index=True)

    # Reference only: a page never owns its parent
    parent_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=True, index=True)

    __table_args__ = (
        db.UniqueConstraint("parent_id", "slug", name="uq_page_slug_per_parent"),
    )
