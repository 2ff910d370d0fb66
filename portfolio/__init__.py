from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from config import Config
from sqlalchemy import event
import logging

db = SQLAlchemy()
login_manager = LoginManager()

logger = logging.getLogger(__name__)

def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()

def register_error_handlers(app):
    from portfolio.errors import PortfolioError

    @app.errorhandler(PortfolioError)
    def handle_portfolio_error(error):
        return jsonify({'success': False, 'message': error.message}), error.status_code

    @app.errorhandler(413)
    def handle_too_large(error):
        return jsonify({'success': False, 'message': 'Request body too large'}), 413

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    uri = app.config['SQLALCHEMY_DATABASE_URI']
    if not uri.startswith('sqlite'):
        app.config.setdefault('SQLALCHEMY_ENGINE_OPTIONS', {
            'pool_size': app.config.get('DB_POOL_SIZE', 10),
            'pool_timeout': app.config.get('DB_POOL_TIMEOUT', 30),
            'pool_pre_ping': True,
        })

    db.init_app(app)
    login_manager.init_app(app)

    from portfolio.models import AdminUser

    @login_manager.user_loader
    def load_user(user_id):
        try:
            admin = db.session.get(AdminUser, int(user_id))
        except ValueError:
            return None
        if admin and admin.is_active:
            return admin
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Unauthorized'}), 401

    register_error_handlers(app)

    from portfolio.routes import auth, admin, public

    app.register_blueprint(auth.bp)
    app.register_blueprint(admin.bp)
    app.register_blueprint(public.bp)

    with app.app_context():
        if uri.startswith('sqlite'):
            event.listen(db.engine, 'connect', _enable_sqlite_foreign_keys)
        db.create_all()
        from portfolio.utils import init_db
        init_db.initialize_database()

    return app
