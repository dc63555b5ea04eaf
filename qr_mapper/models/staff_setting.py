from qr_mapper.extensions import db

STAFF_PASSWORD_KEY = "staff_password"


class StaffSetting(db.Model):
    __tablename__ = "staff_settings"

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False)
