from flask import Blueprint, send_file, request, current_app
from flask_login import login_required, current_user
from services.document_builder import MODE_DETAILED
from services.export_service import ExportService, ExportError, EXPORT_FORMATS
from services.form_service import get_editing_sessions
from services.form_session import FormSnapshot
from services.template_registry import TemplateRegistry
from utils import api_error, get_json_body, parse_bool
import io

exports_bp = Blueprint('exports', __name__)

def _send_export(fmt, mode, include_empty, snapshot):
    if fmt not in EXPORT_FORMATS:
        return api_error(f'Unsupported export format: {fmt}')

    template = TemplateRegistry.get_template_by_id(snapshot.template_id)
    if template is None:
        return api_error(f'Unknown template: {snapshot.template_id}')

    try:
        result = ExportService.export(fmt, mode, include_empty, snapshot, template)
    except ExportError as e:
        # Validation problems are 400; renderer failures already logged by the service
        status = 500 if e.__cause__ is not None else 400
        return api_error(str(e), status=status)

    return send_file(
        io.BytesIO(result.content),
        mimetype=result.mimetype,
        as_attachment=True,
        download_name=result.filename
    )

@exports_bp.route('/api/forms/<form_id>/export', methods=['GET'])
@login_required
def export_form(form_id):
    """
    Downloads the current state of a saved form.
    Query: format=pdf|docx|txt, mode=detailed|summary, include_empty=true|false
    """
    session = get_editing_sessions().get(form_id, current_user.owner_scope)
    if not session:
        return api_error('Form not found', status=404)

    fmt = (request.args.get('format') or 'pdf').lower()
    mode = (request.args.get('mode') or MODE_DETAILED).lower()
    include_empty = parse_bool(request.args.get('include_empty'), default=True)

    current_app.logger.info(f"Export requested: {form_id} ({fmt}/{mode})")
    return _send_export(fmt, mode, include_empty, session.to_snapshot())

@exports_bp.route('/api/guest/export', methods=['POST'])
def guest_export():
    """
    Guest mode export. The snapshot travels in the body and nothing is stored.
    Body: { format, mode, include_empty, snapshot: { title, template_id, form_data | flat_answers + instances } }
    """
    data = get_json_body()
    snapshot = FormSnapshot.from_payload(data.get('snapshot') or {})

    fmt = (data.get('format') or 'pdf').lower()
    mode = (data.get('mode') or MODE_DETAILED).lower()
    include_empty = parse_bool(data.get('include_empty'), default=True)

    return _send_export(fmt, mode, include_empty, snapshot)
