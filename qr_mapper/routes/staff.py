import logging
from flask import Blueprint, request, jsonify
from qr_mapper.services.linking_service import verify_password

logger = logging.getLogger(__name__)

staff_bp = Blueprint('staff', __name__)


@staff_bp.route('/verify-staff', methods=['POST'])
def verify_staff():
    """
    Check the shared staff password
    ---
    tags:
      - Staff
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - password
          properties:
            password:
              type: string
    responses:
      200:
        description: Password accepted
      400:
        description: Password missing
      401:
        description: Incorrect password
      500:
        description: Store failure
    """
    data = request.get_json(silent=True)
    password = data.get('password') if isinstance(data, dict) else None

    if not password or not isinstance(password, str):
        return jsonify({'ok': False, 'message': 'Password required'}), 400

    try:
        matched = verify_password(password)
    except Exception as e:
        logger.error("Staff password check failed: %s", e)
        return jsonify({'ok': False, 'message': 'Server error'}), 500

    if matched:
        return jsonify({'ok': True}), 200

    return jsonify({'ok': False, 'message': 'Incorrect password'}), 401
