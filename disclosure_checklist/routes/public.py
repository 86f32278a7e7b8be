from flask import Blueprint, render_template, current_app, url_for
from services.document_builder import DocumentBuilder, MODE_DETAILED
from services.form_session import FormSnapshot
from services.form_store import FormStoreError, get_form_store
from services.template_registry import TemplateRegistry
from utils import api_response, api_error

public_bp = Blueprint('public', __name__)

NOT_FOUND_MESSAGE = "Form not found or is no longer public."
PUBLIC_ID_PLACEHOLDER = "__public_id__"

def _load_public_document(public_id):
    """Returns (record, document) for a published form, or (None, None)."""
    record = get_form_store().fetch_public(public_id)
    if not record:
        return None, None

    snapshot = FormSnapshot.from_payload(record)
    template = TemplateRegistry.get_template_by_id(snapshot.template_id)
    if template is None:
        return None, None

    document = DocumentBuilder(template, mode=MODE_DETAILED, include_empty=True).build(snapshot)
    return record, document

@public_bp.route('/')
def index():
    """
    Landing page for share and recovery links. Their payload sits in the hash
    fragment, which never reaches the server, so the page dispatches it in the browser:
    `#/view/<public_id>` opens the public view, `#type=recovery&...` the password form.
    """
    return render_template(
        'index.html',
        view_url=url_for('public.public_view', public_id=PUBLIC_ID_PLACEHOLDER),
        update_password_url=url_for('auth.update_password'),
        placeholder=PUBLIC_ID_PLACEHOLDER,
    )

@public_bp.route('/view/<public_id>')
def public_view(public_id):
    try:
        record, document = _load_public_document(public_id)
    except FormStoreError as e:
        current_app.logger.error(f"Failed to load public form {public_id}: {e}")
        return render_template('public_view.html', document=None, error="Failed to load form."), 502

    if not record:
        return render_template('public_view.html', document=None, error=NOT_FOUND_MESSAGE), 404

    return render_template('public_view.html', document=document, author_name=record.get('author_name'))

@public_bp.route('/api/public/<public_id>')
def public_form_json(public_id):
    try:
        record, document = _load_public_document(public_id)
    except FormStoreError as e:
        current_app.logger.error(f"Failed to load public form {public_id}: {e}")
        return api_error("Failed to load form.", status=502)

    if not record:
        return api_error(NOT_FOUND_MESSAGE, status=404)

    return api_response(data={
        'title': record.get('title'),
        'template_id': record.get('template_id'),
        'author_name': record.get('author_name'),
        'document': document.to_dict(),
    })
