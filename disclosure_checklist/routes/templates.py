from flask import Blueprint
from services.template_registry import TemplateRegistry
from utils import api_response, api_error

templates_bp = Blueprint('templates', __name__, url_prefix='/api/templates')

@templates_bp.route('', methods=['GET'])
def list_templates():
    templates = [
        {'id': t.id, 'name': t.name, 'description': t.description}
        for t in TemplateRegistry.list_templates()
    ]
    return api_response(data=templates)

@templates_bp.route('/<template_id>', methods=['GET'])
def get_template(template_id):
    template = TemplateRegistry.get_template_by_id(template_id)
    if not template:
        return api_error('Template not found', status=404)
    return api_response(data=template.to_dict())
