from flask import Blueprint, current_app
from flask_login import login_required, current_user
from services.document_builder import DocumentBuilder, MODE_DETAILED
from services.form_service import FormService, FormValidationError, get_editing_sessions
from services.form_session import FormSession, FormSnapshot, DEFAULT_FORM_TITLE
from services.form_store import FormStoreError, get_form_store
from services.template_registry import DEFAULT_TEMPLATE_ID
from utils import api_response, api_error, get_json_body, get_public_base_url

forms_bp = Blueprint('forms', __name__, url_prefix='/api/forms')

def _serialize_session(session):
    public_url = None
    if session.public_id and session.is_public:
        public_url = FormService.public_url(session.public_id, get_public_base_url())
    return {
        'id': session.form_id,
        'title': session.title,
        'template_id': session.template_id,
        'flat_answers': session.flat_answers,
        'instances': session.instances,
        'public_id': session.public_id,
        'is_public': session.is_public,
        'author_name': session.author_name,
        'public_url': public_url,
        'completion': session.completion_report(),
    }

def _load_session(form_id):
    return get_editing_sessions().get(form_id, current_user.owner_scope)

def _store_failure(action, form_id, e):
    current_app.logger.error(f"Failed to {action} form {form_id}: {e}")
    return api_error(str(e), status=502)

@forms_bp.errorhandler(FormStoreError)
def handle_store_error(e):
    # Raised while loading a form outside the per-route handlers
    current_app.logger.error(f"Form store error: {e}")
    return api_error(str(e), status=502)

# ==========================================
# FORM LIFECYCLE
# ==========================================

@forms_bp.route('', methods=['GET'])
@login_required
def list_forms():
    try:
        records = get_form_store().list(current_user.owner_scope)
    except FormStoreError as e:
        return _store_failure('list', '-', e)

    forms = [{
        'id': r['id'],
        'title': r['title'],
        'template_id': r.get('template_id'),
        'is_public': bool(r.get('is_public')),
        'updated_at': r.get('updated_at'),
    } for r in records]
    return api_response(data=forms)

@forms_bp.route('', methods=['POST'])
@login_required
def create_form():
    data = get_json_body()
    try:
        session = FormSession(
            template_id=data.get('template_id') or DEFAULT_TEMPLATE_ID,
            title=data.get('title') or DEFAULT_FORM_TITLE,
        )
        FormService.save(session, current_user.owner_scope)
    except (ValueError, FormValidationError) as e:
        return api_error(str(e))
    except FormStoreError as e:
        return _store_failure('create', 'new', e)

    return api_response(data=_serialize_session(session), status=201)

@forms_bp.route('/<form_id>', methods=['GET'])
@login_required
def get_form(form_id):
    session = _load_session(form_id)
    if not session:
        return api_error('Form not found', status=404)
    return api_response(data=_serialize_session(session))

@forms_bp.route('/<form_id>', methods=['PUT'])
@login_required
def save_form(form_id):
    """
    Manual save. Optional `title` and `form_data` replace the in-memory state first.
    Runs independently of the auto-save timer and reports failures directly.
    """
    session = _load_session(form_id)
    if not session:
        return api_error('Form not found', status=404)

    data = get_json_body()
    if 'title' in data:
        session.rename(data.get('title') or '')
    if 'form_data' in data or 'flat_answers' in data:
        snapshot = FormSnapshot.from_payload(dict(data, template_id=session.template_id))
        session.flat_answers = snapshot.flat_answers
        session.instances = snapshot.instances

    try:
        FormService.save(session, current_user.owner_scope)
    except FormValidationError as e:
        return api_error(str(e))
    except FormStoreError as e:
        return _store_failure('save', form_id, e)

    return api_response(data=_serialize_session(session))

@forms_bp.route('/<form_id>', methods=['DELETE'])
@login_required
def delete_form(form_id):
    sessions = get_editing_sessions()
    session = _load_session(form_id)
    if not session:
        return api_error('Form not found', status=404)

    sessions.drop(form_id)
    try:
        get_form_store().delete(form_id)
    except FormStoreError as e:
        return _store_failure('delete', form_id, e)

    current_app.logger.info(f"Form deleted: {form_id}")
    return api_response()

@forms_bp.route('/<form_id>/publish', methods=['POST'])
@login_required
def publish_form(form_id):
    session = _load_session(form_id)
    if not session:
        return api_error('Form not found', status=404)

    author_name = get_json_body().get('author_name') or session.author_name
    try:
        public_id = FormService.publish(session, current_user.owner_scope, author_name)
    except FormValidationError as e:
        return api_error(str(e))
    except FormStoreError as e:
        return _store_failure('publish', form_id, e)

    return api_response(data={
        'public_id': public_id,
        'public_url': FormService.public_url(public_id, get_public_base_url()),
    })

@forms_bp.route('/<form_id>/unpublish', methods=['POST'])
@login_required
def unpublish_form(form_id):
    session = _load_session(form_id)
    if not session:
        return api_error('Form not found', status=404)

    try:
        FormService.unpublish(session)
    except FormStoreError as e:
        return _store_failure('unpublish', form_id, e)

    return api_response(data={'public_id': session.public_id, 'is_public': False})

@forms_bp.route('/<form_id>/submit', methods=['POST'])
@login_required
def submit_form(form_id):
    sessions = get_editing_sessions()
    session = _load_session(form_id)
    if not session:
        return api_error('Form not found', status=404)

    try:
        FormService.save(session, current_user.owner_scope)
        record = get_form_store().submit(form_id)
    except FormValidationError as e:
        return api_error(str(e))
    except FormStoreError as e:
        return _store_failure('submit', form_id, e)

    # Submitted forms leave the editing list
    sessions.drop(form_id)
    return api_response(data={'id': form_id, 'status': (record or {}).get('status')})

# ==========================================
# EDITING
# ==========================================

@forms_bp.route('/<form_id>/answers', methods=['PATCH'])
@login_required
def update_answer(form_id):
    """
    Body: { section_id, question_id, value, instance_index? } and/or { title }.
    The change is applied in memory and the debounced auto-save is re-armed.
    """
    sessions = get_editing_sessions()
    session = _load_session(form_id)
    if not session:
        return api_error('Form not found', status=404)

    data = get_json_body()
    if 'title' in data:
        session.rename(data.get('title') or '')

    section_id = data.get('section_id')
    if section_id:
        question_id = data.get('question_id')
        if not question_id:
            return api_error('question_id is required')
        try:
            index = int(data.get('instance_index', 0))
            session.set_answer(index, section_id, question_id, data.get('value', ''))
        except KeyError:
            return api_error(f'Unknown section: {section_id}', status=404)
        except (IndexError, ValueError, TypeError) as e:
            return api_error(str(e))

    sessions.touch(session, current_user.owner_scope)
    return api_response(data=_serialize_session(session))

@forms_bp.route('/<form_id>/sections/<section_id>/instances', methods=['POST'])
@login_required
def add_instance(form_id, section_id):
    sessions = get_editing_sessions()
    session = _load_session(form_id)
    if not session:
        return api_error('Form not found', status=404)

    try:
        count = session.add_instance(section_id)
    except KeyError:
        return api_error(f'Unknown section: {section_id}', status=404)

    sessions.touch(session, current_user.owner_scope)
    return api_response(data={'count': count, 'instances': session.instances_for(section_id)}, status=201)

@forms_bp.route('/<form_id>/sections/<section_id>/instances/<int:index>', methods=['DELETE'])
@login_required
def remove_instance(form_id, section_id, index):
    sessions = get_editing_sessions()
    session = _load_session(form_id)
    if not session:
        return api_error('Form not found', status=404)

    try:
        count = session.remove_instance(section_id, index)
    except KeyError:
        return api_error(f'Unknown section: {section_id}', status=404)

    sessions.touch(session, current_user.owner_scope)
    return api_response(data={'count': count, 'instances': session.instances_for(section_id)})

@forms_bp.route('/<form_id>/view', methods=['GET'])
@login_required
def view_form(form_id):
    session = _load_session(form_id)
    if not session:
        return api_error('Form not found', status=404)

    document = DocumentBuilder(session.template, mode=MODE_DETAILED).build(session.to_snapshot())
    return api_response(data={
        'document': document.to_dict(),
        'completion': session.completion_report(),
    })
