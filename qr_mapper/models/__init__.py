from qr_mapper.models.badge_mapping import BadgeMapping
from qr_mapper.models.staff_setting import StaffSetting, STAFF_PASSWORD_KEY

__all__ = ["BadgeMapping", "StaffSetting", "STAFF_PASSWORD_KEY"]
