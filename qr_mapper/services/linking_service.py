"""
Linking Service
Badge -> ticket upsert, reverse lookup for the redirect handler,
and the staff password check.
"""

import logging
from flask import current_app
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from qr_mapper.errors import ConfigurationError, StoreError
from qr_mapper.extensions import db
from qr_mapper.models import BadgeMapping, StaffSetting, STAFF_PASSWORD_KEY

logger = logging.getLogger(__name__)

UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def require_store():
    """Raise ConfigurationError if the app was started without store credentials."""
    if "sqlalchemy" not in current_app.extensions:
        raise ConfigurationError(
            "Missing store env vars. Set STORE_URL and STORE_KEY in .env"
        )


def link(badge_code, ticket_url):
    """
    Insert or overwrite the ticket URL for a badge.
    Conflict target is the unique badge_code column, so repeating the call
    leaves exactly one row.
    """
    require_store()

    dialect = db.engine.dialect.name
    insert = UPSERT_DIALECTS.get(dialect)
    if insert is None:
        raise StoreError(f"Upsert is not supported on {dialect}")

    stmt = insert(BadgeMapping).values(badge_code=badge_code, luma_url=ticket_url)
    stmt = stmt.on_conflict_do_update(
        index_elements=["badge_code"],
        set_={"luma_url": stmt.excluded.luma_url},
    )

    try:
        db.session.execute(stmt)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Failed to link badge %s: %s", badge_code, e)
        raise StoreError(str(e)) from e

    logger.info("Linked badge %s -> %s", badge_code, ticket_url)


def resolve(badge_code):
    """Return the ticket URL linked to badge_code, or None."""
    require_store()

    try:
        mapping = BadgeMapping.query.filter_by(badge_code=badge_code).first()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError(str(e)) from e

    if not mapping or not mapping.luma_url:
        return None
    return mapping.luma_url


def verify_password(password):
    # Plaintext comparison against a shared secret; a soft gate, not auth.
    require_store()

    try:
        setting = db.session.get(StaffSetting, STAFF_PASSWORD_KEY)
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError(str(e)) from e

    if setting is None:
        raise StoreError("Staff password is not configured")

    return setting.value == password


def set_staff_password(password):
    require_store()

    setting = db.session.get(StaffSetting, STAFF_PASSWORD_KEY)
    if setting is None:
        setting = StaffSetting(key=STAFF_PASSWORD_KEY, value=password)
        db.session.add(setting)
    else:
        setting.value = password

    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError(str(e)) from e
