import os
from urllib.parse import urlparse
from dotenv import load_dotenv
load_dotenv() # Load env vars before anything else

from flask import Flask, request
from werkzeug.middleware.proxy_fix import ProxyFix
from flask_login import LoginManager
from flask_migrate import Migrate
from models import db, User
from services.autosave import DEFAULT_AUTOSAVE_DELAY
from services.form_service import EditingSessions, DEFAULT_MAX_SESSIONS, DEFAULT_IDLE_TIMEOUT
from services.form_store import init_form_store
from services.supabase_service import init_supabase, init_supabase_auth
from utils import api_error

def _default_database_url(app):
    database_url = os.environ.get('DATABASE_URL')

    # Normalize Postgres URL
    if database_url and database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)

    if not database_url:
        # Serverless hosts only allow writes under /tmp
        if os.access(app.root_path, os.W_OK):
            database_url = f"sqlite:///{os.path.join(app.root_path, 'forms.db')}"
        else:
            database_url = 'sqlite:////tmp/forms.db'
        print(f"DATABASE: No DATABASE_URL set. Using {database_url}")

    return database_url

def create_app(test_config=None):
    app = Flask(__name__, instance_path='/tmp')
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    # --- CONFIGURATION ---
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'disclosure-checklist-dev-key')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SUPABASE_URL'] = os.environ.get('SUPABASE_URL')
    app.config['SUPABASE_KEY'] = os.environ.get('SUPABASE_KEY')
    app.config['SUPABASE_SERVICE_ROLE_KEY'] = os.environ.get('SUPABASE_SERVICE_ROLE_KEY')
    app.config['FORM_STORE_BACKEND'] = os.environ.get('FORM_STORE_BACKEND', 'auto')
    app.config['AUTOSAVE_DELAY_SECONDS'] = float(os.environ.get('AUTOSAVE_DELAY_SECONDS', DEFAULT_AUTOSAVE_DELAY))
    app.config['PUBLIC_BASE_URL'] = os.environ.get('PUBLIC_BASE_URL')
    app.config['EDITING_SESSIONS_MAX'] = int(os.environ.get('EDITING_SESSIONS_MAX', DEFAULT_MAX_SESSIONS))
    app.config['EDITING_SESSION_IDLE_SECONDS'] = float(os.environ.get('EDITING_SESSION_IDLE_SECONDS', DEFAULT_IDLE_TIMEOUT))

    if test_config:
        app.config.update(test_config)

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        app.config['SQLALCHEMY_DATABASE_URI'] = _default_database_url(app)

    # Supabase Setup
    try:
        app.supabase = init_supabase(app)
        app.supabase_auth = init_supabase_auth(app)
    except Exception as supabase_e:
        print(f"Supabase Init Error: {supabase_e}")
        app.supabase = None
        app.supabase_auth = None

    # --- INITIALIZE EXTENSIONS ---
    db.init_app(app)
    Migrate(app, db)

    login_manager = LoginManager()
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return api_error('Authentication required', status=401)

    init_form_store(app)
    app.extensions['editing_sessions'] = EditingSessions(
        app,
        delay=app.config['AUTOSAVE_DELAY_SECONDS'],
        max_sessions=app.config['EDITING_SESSIONS_MAX'],
        idle_timeout=app.config['EDITING_SESSION_IDLE_SECONDS'],
    )

    # --- ERROR HANDLERS ---
    def _wants_json():
        return request.path.startswith(('/api/', '/auth/'))

    @app.errorhandler(404)
    def not_found_error(error):
        if not _wants_json():
            return error
        return api_error('Not found', status=404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        if not _wants_json():
            return error
        return api_error('Method not allowed', status=405)

    @app.errorhandler(500)
    def internal_error(error):
        # Fail-safe rollback
        db.session.rollback()
        app.logger.error(f"Unhandled error on {request.path}: {error}")
        return api_error('Internal server error', status=500)

    @app.route('/ping')
    def ping():
        return "pong"

    # --- REGISTER BLUEPRINTS ---
    from auth import auth as auth_blueprint
    from routes.templates import templates_bp
    from routes.forms import forms_bp
    from routes.exports import exports_bp
    from routes.public import public_bp, index

    app.register_blueprint(auth_blueprint)
    app.register_blueprint(templates_bp)
    app.register_blueprint(forms_bp)
    app.register_blueprint(exports_bp)
    app.register_blueprint(public_bp)

    # Share and recovery links point at the public base path, which may sit below the root
    base_path = urlparse(app.config.get('PUBLIC_BASE_URL') or '').path.rstrip('/')
    if base_path:
        app.add_url_rule(f'{base_path}/', 'index_at_base_path', index)

    # --- TABLE CREATION ---
    # Critical for Vercel/Ephemeral environments
    with app.app_context():
        db.create_all()

    return app

if __name__ == '__main__':
    create_app().run(debug=True, port=5001)
