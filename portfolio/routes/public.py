import os
from flask import Blueprint, current_app, jsonify, render_template, request, send_from_directory
from portfolio.services import get_store, group_skills_by_category
from portfolio.utils.helpers import request_fields
from portfolio.utils.telegram_notifications import notify_new_message

bp = Blueprint('public', __name__)

@bp.route('/')
def index():
    store = get_store()
    skills_by_category = group_skills_by_category(store.list_skills())
    return render_template('public/index.html',
                         profile=store.get_profile(),
                         skills_by_category=skills_by_category,
                         projects=store.list_projects(),
                         certificates=store.list_certificates())

@bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    return send_from_directory(os.path.join(current_app.config['UPLOAD_FOLDER'], 'uploads'), filename)

@bp.route('/api/profile')
def profile():
    return jsonify(get_store().get_profile())

@bp.route('/api/skills')
def skills():
    return jsonify(get_store().list_skills())

@bp.route('/api/skills/grouped')
def skills_grouped():
    grouped = group_skills_by_category(get_store().list_skills())
    return jsonify([
        {'category': category, 'skills': category_skills}
        for category, category_skills in grouped.items()
    ])

@bp.route('/api/skills/<int:skill_id>')
def skill_detail(skill_id):
    return jsonify(get_store().get_skill(skill_id))

@bp.route('/api/technologies')
def technologies():
    return jsonify(get_store().list_technologies())

@bp.route('/api/projects')
def projects():
    return jsonify(get_store().list_projects())

@bp.route('/api/certificates')
def certificates():
    return jsonify(get_store().list_certificates())

@bp.route('/api/contact', methods=['POST'])
def contact():
    data = request_fields(request)
    message = get_store().add_message(data, request.remote_addr)

    notify_new_message(
        message,
        current_app.config.get('TELEGRAM_BOT_TOKEN'),
        current_app.config.get('TELEGRAM_CHAT_ID')
    )

    return jsonify({'success': True, 'message': 'Message sent successfully!'})
