from pagebuilder.extensions import db
from .base import BaseModel, utc_now

class Asset(BaseModel):
    __tablename__ = "assets"

    url = db.Column(db.String(512), nullable=False)
    type = db.Column(db.String(20), nullable=False, index=True)  # image, video, file
    filename = db.Column(db.String(255), nullable=False)
    uploaded_at = db.Column(db.DateTime(timezone=True), default=utc_now, nullable=False)
    uploaded_by = db.Column(db.String(100), nullable=True)
