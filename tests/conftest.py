"""Shared fixtures for the portfolio tests."""

import io

import pytest

from config import Config
from portfolio import create_app, db
from portfolio.services import AuditTrail, ContentStore


@pytest.fixture
def app(tmp_path):
    """Application backed by a throwaway SQLite file and upload folder."""

    class TestConfig(Config):
        TESTING = True
        SECRET_KEY = 'test-secret'
        SQLALCHEMY_DATABASE_URI = 'sqlite:///' + str(tmp_path / 'test.db')
        UPLOAD_FOLDER = str(tmp_path)
        DEFAULT_ADMIN_USERNAME = 'admin'
        DEFAULT_ADMIN_PASSWORD = 'admin123'
        TELEGRAM_BOT_TOKEN = ''
        TELEGRAM_CHAT_ID = ''

    app = create_app(TestConfig)
    yield app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client holding an authenticated admin session."""
    response = client.post('/api/login', json={'username': 'admin', 'password': 'admin123'})
    assert response.status_code == 200
    return client


@pytest.fixture
def store(app):
    """Content store bound to the test database, auditing as admin #1."""
    with app.app_context():
        yield ContentStore(db.session, audit=AuditTrail(db.session, actor_id=1, source_ip='127.0.0.1'))


@pytest.fixture
def image_file():
    """Factory for an in-memory PNG upload tuple."""
    def make(name='photo.png', content=b'\x89PNG\r\n\x1a\nfake', mimetype='image/png'):
        return (io.BytesIO(content), name, mimetype)
    return make


@pytest.fixture
def pdf_file():
    """Factory for an in-memory PDF upload tuple."""
    def make(name='certificate.pdf', content=b'%PDF-1.4 fake'):
        return (io.BytesIO(content), name, 'application/pdf')
    return make
