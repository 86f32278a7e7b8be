import os
import sys

# 1. Add ROOT to sys.path (to find 'disclosure_checklist' package)
root_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if root_dir not in sys.path:
    sys.path.append(root_dir)

# 2. Add the app dir to sys.path (so 'from models import...' works inside app.py)
app_dir = os.path.join(root_dir, 'disclosure_checklist')
if app_dir not in sys.path:
    sys.path.append(app_dir)

try:
    # 3. Import Application Factory
    from app import create_app
    app = create_app()

except Exception as e:
    # Diagnostic Fail-Safe
    from flask import Flask, jsonify
    import traceback
    err_msg = traceback.format_exc()
    print(f"CRITICAL ERROR STARTING APP: {err_msg}")
    app = Flask(__name__)

    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def catch_all(path):
        return jsonify({'success': False, 'data': None, 'error': 'Application failed to start'}), 503

    @app.route('/ping')
    def ping(): return "pong_critical_fallback"

# Vercel Serverless Function Entry Point
# This works by exposing the WSGI app as a variable named 'app'
# which Vercel's Python runtime automatically picks up.
