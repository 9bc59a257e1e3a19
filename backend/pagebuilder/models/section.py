from pagebuilder.extensions import db
from .base import BaseModel

class Section(BaseModel):
    __tablename__ = "sections"

    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)
    type = db.Column(db.String(50), nullable=False)  # image-text, slider, hero, ...
    order = db.Column(db.Integer, nullable=False)
    content = db.Column(db.JSON, nullable=False, default=dict)

    __table_args__ = (
        db.UniqueConstraint("page_id", "order", name="uq_page_section_order"),
        db.Index("idx_section_page_order", "page_id", "order"),
    )
