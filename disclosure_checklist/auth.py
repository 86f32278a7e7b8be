from flask import Blueprint, current_app
from flask_login import login_user, logout_user, login_required, current_user
from werkzeug.security import generate_password_hash, check_password_hash
from itsdangerous import URLSafeTimedSerializer, SignatureExpired, BadSignature
from models import db, User, get_now
from services.supabase_service import SupabaseAuth
from utils import api_response, api_error, validate_new_password, get_json_body, get_public_base_url

auth = Blueprint('auth', __name__, url_prefix='/auth')

RECOVERY_SALT = 'password-recovery'
RECOVERY_MAX_AGE = 3600 # 1 hour

def _serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'])

def generate_recovery_token(email):
    return _serializer().dumps({'email': email}, salt=RECOVERY_SALT)

def verify_recovery_token(token):
    try:
        data = _serializer().loads(token, salt=RECOVERY_SALT, max_age=RECOVERY_MAX_AGE)
    except (SignatureExpired, BadSignature):
        return None
    return data.get('email')

def _user_payload(user):
    return {'id': user.id, 'email': user.email, 'owner_scope': user.owner_scope}

@auth.route('/signup', methods=['POST'])
def signup():
    data = get_json_body()
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    confirm = data.get('confirm_password') or ''

    if not email:
        return api_error('Email is required')
    error = validate_new_password(password, confirm)
    if error:
        return api_error(error)

    if User.query.filter_by(email=email).first():
        return api_error('This email is already registered.')

    supabase_uid = None
    if SupabaseAuth.available():
        try:
            sb_user = SupabaseAuth.sign_up(email, password)
            supabase_uid = sb_user.id if sb_user else None
        except Exception as e:
            current_app.logger.error(f"Supabase signup failed for {email}: {e}")
            return api_error(f'Could not create account: {e}', status=502)

    user = User(
        email=email,
        supabase_uid=supabase_uid,
        password_hash=generate_password_hash(password),
    )
    db.session.add(user)
    db.session.commit()

    login_user(user)
    current_app.logger.info(f"Account created: {email}")
    return api_response(data=_user_payload(user), status=201)

@auth.route('/login', methods=['POST'])
def login():
    data = get_json_body()
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    remember = bool(data.get('remember'))

    if not email or not password:
        return api_error('Email and password are required')

    # 1. Try Supabase Login
    supabase_user = None
    if SupabaseAuth.available():
        try:
            supabase_user = SupabaseAuth.sign_in(email, password)
        except Exception as e:
            current_app.logger.warning(f"Supabase login failed for {email}: {e}")

    # 2. Local User Lookup
    user = User.query.filter_by(email=email).first()
    authenticated = False

    if supabase_user:
        authenticated = True
        if not user:
            # Account created directly in Supabase; mirror it locally
            user = User(email=email, supabase_uid=supabase_user.id)
            db.session.add(user)
        elif not user.supabase_uid:
            user.supabase_uid = supabase_user.id
    elif user and user.password_hash and check_password_hash(user.password_hash, password):
        authenticated = True

    if not authenticated:
        current_app.logger.info(f"Login failed for {email}")
        return api_error('Invalid email or password.', status=401)

    user.last_login = get_now()
    db.session.commit()
    login_user(user, remember=remember)
    return api_response(data=_user_payload(user))

@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    # Supabase sessions live only on the per-call auth clients, so only the Flask session ends here
    logout_user()
    return api_response()

@auth.route('/me', methods=['GET'])
@login_required
def me():
    return api_response(data=_user_payload(current_user))

@auth.route('/recover', methods=['POST'])
def recover():
    """
    Starts password recovery. Supabase sends the email itself and redirects back with
    `type=recovery` in the hash fragment; locally a signed token is issued instead.
    """
    email = (get_json_body().get('email') or '').strip().lower()
    if not email:
        return api_error('Email is required')

    if SupabaseAuth.available():
        try:
            SupabaseAuth.send_recovery_email(email, redirect_to=get_public_base_url())
        except Exception as e:
            current_app.logger.error(f"Recovery email failed for {email}: {e}")
            return api_error('Could not send recovery email. Try again later.', status=502)
    else:
        user = User.query.filter_by(email=email).first()
        if user:
            token = generate_recovery_token(email)
            link = f"{get_public_base_url().rstrip('/')}/#type=recovery&token={token}"
            current_app.logger.info(f"Password recovery link for {email}: {link}")

    # Same answer whether or not the account exists
    return api_response(data={'message': 'If the account exists, a recovery link has been sent.'})

@auth.route('/update-password', methods=['POST'])
def update_password():
    data = get_json_body()
    if data.get('type') != 'recovery':
        return api_error('Not a recovery request')

    password = data.get('password') or ''
    error = validate_new_password(password, data.get('confirm_password') or '')
    if error:
        return api_error(error)

    if SupabaseAuth.available():
        access_token = data.get('access_token')
        if not access_token:
            return api_error('Missing recovery token', status=401)
        try:
            sb_user = SupabaseAuth.update_password(access_token, password)
        except Exception as e:
            current_app.logger.error(f"Supabase password update failed: {e}")
            return api_error('Could not update password. Try again later.', status=502)
        if not sb_user:
            return api_error('Recovery link is invalid or expired', status=401)
        user = User.query.filter_by(supabase_uid=sb_user.id).first()
    else:
        email = verify_recovery_token(data.get('token') or '')
        if not email:
            return api_error('Recovery link is invalid or expired', status=401)
        user = User.query.filter_by(email=email).first()
        if not user:
            return api_error('Recovery link is invalid or expired', status=401)

    if user:
        user.password_hash = generate_password_hash(password)
        db.session.commit()

    return api_response(data={'message': 'Password updated.'})
