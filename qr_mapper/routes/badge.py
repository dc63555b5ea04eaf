import logging
from flask import Blueprint, redirect, url_for
from qr_mapper.services.linking_service import resolve

logger = logging.getLogger(__name__)

badge_bp = Blueprint('badge', __name__)


@badge_bp.route('/badge/<badge_id>', methods=['GET'])
def badge_redirect(badge_id):
    """
    Redirect a scanned badge to its linked ticket
    ---
    tags:
      - Badges
    parameters:
      - name: badge_id
        in: path
        type: string
        required: true
    responses:
      307:
        description: Redirect to the linked ticket URL, or to /unlinked
    """
    try:
        ticket_url = resolve(badge_id)
    except Exception as e:
        logger.warning("Lookup for badge %s failed: %s", badge_id, e)
        ticket_url = None

    if not ticket_url:
        return redirect(url_for('pages.unlinked'), code=307)

    return redirect(ticket_url, code=307)
