from flask import Blueprint, jsonify, request
from portfolio.services import get_store
from portfolio.utils.decorators import admin_required
from portfolio.utils.helpers import request_fields
from portfolio.utils.uploads import discard_on_error, optional_upload

bp = Blueprint('admin', __name__, url_prefix='/api')

def _request_data():
    return request_fields(request)

def _technology_names(data):
    if hasattr(data, 'getlist'):
        values = data.getlist('technologies')
        return values[0] if len(values) == 1 else values
    return data.get('technologies')

def _ok(message, **extra):
    return jsonify({'success': True, 'message': message, **extra})

@bp.route('/dashboard')
@admin_required
def dashboard():
    return jsonify(get_store().get_dashboard_stats())

@bp.route('/profile', methods=['POST'])
@admin_required
def update_profile():
    data = _request_data()
    image_path = optional_upload(request, 'profileImage')
    with discard_on_error(image_path):
        profile = get_store().upsert_profile(data, image_path)
    return _ok('Profile updated successfully', profile=profile)

@bp.route('/resume', methods=['POST'])
@admin_required
def upload_resume():
    resume_path = optional_upload(request, 'resume')
    if not resume_path:
        return jsonify({'success': False, 'message': 'No file uploaded'}), 400

    with discard_on_error(resume_path):
        get_store().set_resume(resume_path)
    return _ok('Resume uploaded successfully', path=resume_path)

@bp.route('/resume', methods=['DELETE'])
@admin_required
def delete_resume():
    get_store().clear_resume()
    return _ok('Resume deleted successfully')

@bp.route('/skills', methods=['POST'])
@admin_required
def add_skill():
    skill_id = get_store().add_skill(_request_data())
    return _ok('Skill added successfully', id=skill_id)

@bp.route('/skills/<int:skill_id>', methods=['PUT'])
@admin_required
def edit_skill(skill_id):
    get_store().update_skill(skill_id, _request_data())
    return _ok('Skill updated successfully')

@bp.route('/skills/<int:skill_id>', methods=['DELETE'])
@admin_required
def delete_skill(skill_id):
    get_store().delete_skill(skill_id)
    return _ok('Skill deleted successfully')

@bp.route('/technologies', methods=['POST'])
@admin_required
def add_technology():
    technology_id = get_store().add_technology(_request_data())
    return _ok('Technology added successfully', id=technology_id)

@bp.route('/technologies/<int:technology_id>', methods=['DELETE'])
@admin_required
def delete_technology(technology_id):
    get_store().delete_technology(technology_id)
    return _ok('Technology deleted successfully')

@bp.route('/projects', methods=['POST'])
@admin_required
def add_project():
    data = _request_data()
    image_path = optional_upload(request, 'image')
    with discard_on_error(image_path):
        project_id = get_store().add_project(data, _technology_names(data), image_path)
    return _ok('Project added successfully', id=project_id)

@bp.route('/projects/<int:project_id>', methods=['PUT'])
@admin_required
def edit_project(project_id):
    data = _request_data()
    image_path = optional_upload(request, 'image')
    with discard_on_error(image_path):
        get_store().update_project(project_id, data, _technology_names(data), image_path)
    return _ok('Project updated successfully')

@bp.route('/projects/<int:project_id>', methods=['DELETE'])
@admin_required
def delete_project(project_id):
    get_store().delete_project(project_id)
    return _ok('Project deleted successfully')

@bp.route('/certificates', methods=['POST'])
@admin_required
def add_certificate():
    data = _request_data()
    pdf_path = optional_upload(request, 'pdf')
    with discard_on_error(pdf_path):
        certificate_id = get_store().add_certificate(data, pdf_path)
    return _ok('Certificate added successfully', id=certificate_id)

@bp.route('/certificates/<int:certificate_id>', methods=['PUT'])
@admin_required
def edit_certificate(certificate_id):
    data = _request_data()
    pdf_path = optional_upload(request, 'pdf')
    with discard_on_error(pdf_path):
        get_store().update_certificate(certificate_id, data, pdf_path)
    return _ok('Certificate updated successfully')

@bp.route('/certificates/<int:certificate_id>', methods=['DELETE'])
@admin_required
def delete_certificate(certificate_id):
    get_store().delete_certificate(certificate_id)
    return _ok('Certificate deleted successfully')

@bp.route('/messages')
@admin_required
def messages():
    return jsonify(get_store().list_messages())

@bp.route('/messages/<int:message_id>', methods=['DELETE'])
@admin_required
def delete_message(message_id):
    get_store().delete_message(message_id)
    return _ok('Message deleted successfully')
