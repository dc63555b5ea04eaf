"""
Scanner Routes
The staff scanner page posts decoded QR payloads and camera events here;
each page load owns one scan session.
"""

from flask import Blueprint, current_app, jsonify, request

scanner_bp = Blueprint('scanner', __name__)


def get_registry():
    return current_app.extensions['scan_sessions']


def session_not_found():
    return jsonify({
        "success": False,
        "error_code": "SESSION_NOT_FOUND",
        "message": "The requested scan session could not be found."
    }), 404


def session_response(session, status=200):
    return jsonify({"success": True, "data": session.snapshot()}), status


@scanner_bp.route('/sessions', methods=['POST'])
def create_session():
    """
    Open a scan session for a scanner page
    ---
    tags:
      - Scanner
    responses:
      201:
        description: New session in scan_badge
    """
    session = get_registry().create()
    return session_response(session, 201)


@scanner_bp.route('/sessions/<session_id>', methods=['GET'])
def get_session(session_id):
    """
    Current state of a scan session
    ---
    tags:
      - Scanner
    parameters:
      - name: session_id
        in: path
        type: string
        required: true
    responses:
      200:
        description: Session snapshot
      404:
        description: Session not found
    """
    session = get_registry().get(session_id)
    if not session:
        return session_not_found()
    return session_response(session)


@scanner_bp.route('/sessions/<session_id>/scan', methods=['POST'])
def scan(session_id):
    """
    Feed a decoded QR payload to the session
    ---
    tags:
      - Scanner
    parameters:
      - name: session_id
        in: path
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          required:
            - raw_value
          properties:
            raw_value:
              type: string
    responses:
      200:
        description: Session snapshot after the scan
      400:
        description: raw_value missing
      404:
        description: Session not found
    """
    session = get_registry().get(session_id)
    if not session:
        return session_not_found()

    data = request.get_json(silent=True) or {}
    raw_value = data.get('raw_value') if isinstance(data, dict) else None
    if not isinstance(raw_value, str):
        return jsonify({
            "success": False,
            "error_code": "INVALID_INPUT",
            "message": "raw_value must be a string."
        }), 400

    session.handle_scan(raw_value)
    return session_response(session)


@scanner_bp.route('/sessions/<session_id>/reset', methods=['POST'])
def reset(session_id):
    """
    Reset the session for the next attendee
    ---
    tags:
      - Scanner
    parameters:
      - name: session_id
        in: path
        type: string
        required: true
    responses:
      200:
        description: Session back in scan_badge
      404:
        description: Session not found
    """
    session = get_registry().get(session_id)
    if not session:
        return session_not_found()
    session.reset()
    return session_response(session)


@scanner_bp.route('/sessions/<session_id>/camera-error', methods=['POST'])
def camera_error(session_id):
    """
    Report that the camera could not start
    ---
    tags:
      - Scanner
    parameters:
      - name: session_id
        in: path
        type: string
        required: true
      - in: body
        name: body
        schema:
          type: object
          properties:
            message:
              type: string
    responses:
      200:
        description: Session snapshot with camera_error set
      404:
        description: Session not found
    """
    session = get_registry().get(session_id)
    if not session:
        return session_not_found()

    data = request.get_json(silent=True) or {}
    message = data.get('message') if isinstance(data, dict) else None
    session.report_camera_error(message if isinstance(message, str) else None)
    return session_response(session)


@scanner_bp.route('/sessions/<session_id>/camera-retry', methods=['POST'])
def camera_retry(session_id):
    """
    Restart the camera capture
    ---
    tags:
      - Scanner
    parameters:
      - name: session_id
        in: path
        type: string
        required: true
    responses:
      200:
        description: Session snapshot with a new capture_generation
      404:
        description: Session not found
    """
    session = get_registry().get(session_id)
    if not session:
        return session_not_found()
    session.retry_camera()
    return session_response(session)


@scanner_bp.route('/sessions/<session_id>', methods=['DELETE'])
def close_session(session_id):
    """
    Close a scan session
    ---
    tags:
      - Scanner
    parameters:
      - name: session_id
        in: path
        type: string
        required: true
    responses:
      200:
        description: Session closed
      404:
        description: Session not found
    """
    if not get_registry().discard(session_id):
        return session_not_found()
    return jsonify({"success": True}), 200
