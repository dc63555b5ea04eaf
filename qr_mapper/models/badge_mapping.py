"""
Badge Mapping Model
One row per badge code; re-linking a badge overwrites luma_url.
"""

import uuid
from datetime import datetime, timezone
from qr_mapper.extensions import db


class BadgeMapping(db.Model):
    __tablename__ = "badge_mappings"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    badge_code = db.Column(db.String(255), unique=True, nullable=False)
    luma_url = db.Column(db.Text, nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    def to_dict(self):
        return {
            "id":         str(self.id),
            "badge_code": self.badge_code,
            "luma_url":   self.luma_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
