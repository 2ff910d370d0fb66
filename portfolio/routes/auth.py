import logging
from flask import Blueprint, jsonify, request, session
from flask_login import login_user, logout_user, current_user
from sqlalchemy import select
from portfolio import db
from portfolio.models import AdminUser
from portfolio.services import AuditTrail
from portfolio.utils.decorators import admin_required
from portfolio.utils.helpers import request_fields, utc_now

logger = logging.getLogger(__name__)

bp = Blueprint('auth', __name__, url_prefix='/api')

@bp.route('/login', methods=['POST'])
def login():
    data = request_fields(request)
    username = (data.get('username') or '').strip()
    password = data.get('password') or ''

    if not username or not password:
        return jsonify({'success': False, 'message': 'Username and password required'}), 400

    admin = db.session.scalars(
        select(AdminUser).filter_by(username=username, is_active=True)
    ).first()

    if admin is None or not admin.check_password(password):
        logger.warning(f'Failed login attempt for {username!r} from {request.remote_addr}')
        AuditTrail(db.session, admin.id if admin else None, request.remote_addr).record(
            'LOGIN_FAILED',
            f'Failed login attempt for: {username}' if admin is None else 'Invalid password'
        )
        return jsonify({'success': False, 'message': 'Invalid credentials'}), 401

    session.permanent = True
    login_user(admin)
    admin.last_login = utc_now()
    db.session.commit()
    logger.info(f'Admin {admin.username!r} logged in')
    AuditTrail(db.session, admin.id, request.remote_addr).record('LOGIN_SUCCESS', 'Successful login')

    return jsonify({
        'success': True,
        'message': 'Login successful',
        'user': {'id': admin.id, 'username': admin.username}
    })

@bp.route('/logout', methods=['POST'])
@admin_required
def logout():
    AuditTrail(db.session, current_user.id, request.remote_addr).record('LOGOUT', 'User logged out')
    logout_user()
    return jsonify({'success': True, 'message': 'Logged out successfully'})

@bp.route('/check-auth')
def check_auth():
    if current_user.is_authenticated:
        return jsonify({'authenticated': True, 'username': current_user.username})
    return jsonify({'authenticated': False})
