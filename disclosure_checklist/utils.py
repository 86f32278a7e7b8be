from flask import jsonify, request, current_app

MIN_PASSWORD_LENGTH = 6

def api_response(success=True, data=None, error=None, status=200):
    """Standardized JSON response for all API routes."""
    response = {
        'success': success,
        'data': data,
        'error': error
    }
    return jsonify(response), status

def api_error(error, status=400):
    return api_response(success=False, error=error, status=status)

def validate_new_password(password, confirm):
    """Returns an error message, or None when the password can be sent to the auth provider."""
    if password != confirm:
        return "Passwords do not match"
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return None

def parse_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')

def get_public_base_url():
    """Configured public origin+path, falling back to the request root."""
    return current_app.config.get('PUBLIC_BASE_URL') or request.url_root

def get_json_body():
    return request.get_json(silent=True) or {}
