from flask import current_app
from portfolio import db
from portfolio.models import AdminUser
from sqlalchemy import inspect, text
import logging

logger = logging.getLogger(__name__)

def initialize_database():
    inspector = inspect(db.engine)

    if 'profile' in inspector.get_table_names():
        columns = [col['name'] for col in inspector.get_columns('profile')]

        with db.engine.begin() as connection:
            for column in ('github_url', 'linkedin_url', 'twitter_url', 'resume_path'):
                if column not in columns:
                    logger.info(f"Adding {column} column to profile")
                    connection.execute(text(f"ALTER TABLE profile ADD COLUMN {column} VARCHAR(255)"))

    if 'project_technologies' in inspector.get_table_names():
        columns = [col['name'] for col in inspector.get_columns('project_technologies')]

        if 'sort_index' not in columns:
            logger.info("Adding sort_index column to project_technologies")
            with db.engine.begin() as connection:
                connection.execute(text("ALTER TABLE project_technologies ADD COLUMN sort_index INTEGER NOT NULL DEFAULT 0"))
                connection.execute(text("UPDATE project_technologies SET sort_index = id"))

    create_default_admin()

    logger.info("Database initialization completed successfully")

def create_default_admin():
    if db.session.query(AdminUser.id).first() is not None:
        return None

    username = current_app.config.get('DEFAULT_ADMIN_USERNAME', 'admin')
    admin = AdminUser(username=username, is_active=True)
    admin.set_password(current_app.config.get('DEFAULT_ADMIN_PASSWORD', 'admin123'))
    db.session.add(admin)
    db.session.commit()
    logger.info(f"Created default admin user '{username}'")
    return admin
