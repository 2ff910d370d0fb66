"""
Tests for the HTTP API and the public page.

Uses the Flask test client against a SQLite-backed app with a temporary
upload folder.
"""

import os

import pytest

from portfolio import db
from portfolio.models import ActivityLog


def stored_uploads(app):
    root = os.path.join(app.config['UPLOAD_FOLDER'], 'uploads')
    return [name for _, _, names in os.walk(root) for name in names]


class TestAuth:
    """Tests for login, logout and access control."""

    def test_login_requires_credentials(self, client):
        response = client.post('/api/login', json={'username': 'admin'})
        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_login_rejects_wrong_password(self, client):
        response = client.post('/api/login', json={'username': 'admin', 'password': 'nope'})
        assert response.status_code == 401
        assert response.get_json()['message'] == 'Invalid credentials'

    def test_login_rejects_unknown_user(self, client):
        response = client.post('/api/login', json={'username': 'ghost', 'password': 'admin123'})
        assert response.status_code == 401

    def test_login_success(self, client):
        response = client.post('/api/login', json={'username': 'admin', 'password': 'admin123'})
        body = response.get_json()

        assert response.status_code == 200
        assert body['success'] is True
        assert body['user']['username'] == 'admin'
        assert client.get('/api/check-auth').get_json() == {'authenticated': True, 'username': 'admin'}

    def test_login_attempts_are_audited(self, app, client):
        client.post('/api/login', json={'username': 'admin', 'password': 'nope'})
        client.post('/api/login', json={'username': 'admin', 'password': 'admin123'})

        with app.app_context():
            actions = [entry.action for entry in db.session.query(ActivityLog).order_by(ActivityLog.id)]
        assert actions == ['LOGIN_FAILED', 'LOGIN_SUCCESS']

    def test_logout(self, admin_client):
        response = admin_client.post('/api/logout')
        assert response.status_code == 200
        assert admin_client.get('/api/check-auth').get_json() == {'authenticated': False}

    @pytest.mark.parametrize('method,path', [
        ('post', '/api/profile'),
        ('post', '/api/resume'),
        ('post', '/api/skills'),
        ('put', '/api/skills/1'),
        ('delete', '/api/skills/1'),
        ('post', '/api/technologies'),
        ('post', '/api/projects'),
        ('delete', '/api/projects/1'),
        ('post', '/api/certificates'),
        ('get', '/api/messages'),
        ('delete', '/api/messages/1'),
        ('get', '/api/dashboard'),
    ])
    def test_privileged_routes_require_login(self, client, method, path):
        response = getattr(client, method)(path, json={})
        assert response.status_code == 401
        assert response.get_json() == {'success': False, 'message': 'Unauthorized'}


class TestProfileApi:
    """Tests for profile and resume endpoints."""

    def test_default_profile(self, client):
        body = client.get('/api/profile').get_json()
        assert body['name'] == 'Your Name'
        assert body['title'] == 'Backend Engineer'
        assert body['image_path'] is None

    def test_upload_and_preserve_image(self, app, admin_client, image_file):
        response = admin_client.post('/api/profile', data={
            'name': 'Ada', 'title': 'Engineer', 'profileImage': image_file(),
        }, content_type='multipart/form-data')
        assert response.status_code == 200
        image_path = response.get_json()['profile']['image_path']
        assert image_path.startswith('uploads/images/')
        assert image_path.endswith('.png')
        assert os.path.isfile(os.path.join(app.config['UPLOAD_FOLDER'], image_path))

        admin_client.post('/api/profile', data={'name': 'Ada L.', 'title': 'Engineer'},
                          content_type='multipart/form-data')
        body = admin_client.get('/api/profile').get_json()
        assert body['name'] == 'Ada L.'
        assert body['image_path'] == image_path

    def test_uploaded_file_is_served(self, admin_client, image_file):
        response = admin_client.post('/api/profile', data={
            'name': 'Ada', 'title': 'Engineer', 'profileImage': image_file(content=b'pixels'),
        }, content_type='multipart/form-data')
        image_path = response.get_json()['profile']['image_path']

        served = admin_client.get('/' + image_path)
        assert served.status_code == 200
        assert served.data == b'pixels'

    def test_profile_rejects_non_image(self, admin_client, image_file):
        response = admin_client.post('/api/profile', data={
            'name': 'Ada', 'title': 'Engineer',
            'profileImage': image_file(name='notes.txt', mimetype='text/plain'),
        }, content_type='multipart/form-data')
        assert response.status_code == 400
        assert response.get_json()['message'] == 'Only image files are allowed!'

    def test_profile_rejects_oversized_image(self, app, admin_client, image_file):
        app.config['MAX_UPLOAD_SIZE'] = 8
        response = admin_client.post('/api/profile', data={
            'name': 'Ada', 'title': 'Engineer', 'profileImage': image_file(content=b'x' * 64),
        }, content_type='multipart/form-data')
        assert response.status_code == 400
        assert response.get_json()['message'] == 'File too large'

    def test_profile_missing_fields(self, admin_client):
        response = admin_client.post('/api/profile', json={'name': 'Ada'})
        assert response.status_code == 400

    def test_resume_upload_and_delete(self, admin_client, pdf_file):
        response = admin_client.post('/api/resume', data={'resume': pdf_file('cv.pdf')},
                                     content_type='multipart/form-data')
        body = response.get_json()
        assert response.status_code == 200
        assert body['path'].startswith('uploads/resumes/')
        assert admin_client.get('/api/profile').get_json()['resume_path'] == body['path']

        admin_client.delete('/api/resume')
        assert admin_client.get('/api/profile').get_json()['resume_path'] is None

    def test_resume_requires_file(self, admin_client):
        response = admin_client.post('/api/resume', data={}, content_type='multipart/form-data')
        assert response.status_code == 400
        assert response.get_json()['message'] == 'No file uploaded'

    def test_resume_must_be_pdf(self, admin_client, image_file):
        response = admin_client.post('/api/resume', data={'resume': image_file()},
                                     content_type='multipart/form-data')
        assert response.status_code == 400
        assert response.get_json()['message'] == 'Only PDF files are allowed!'

    def test_resume_keeps_extension_of_non_ascii_name(self, admin_client, pdf_file):
        response = admin_client.post('/api/resume', data={'resume': pdf_file('简历.pdf')},
                                     content_type='multipart/form-data')
        assert response.status_code == 200
        assert response.get_json()['path'].endswith('.pdf')

    def test_rejected_profile_leaves_no_upload(self, app, admin_client, image_file):
        response = admin_client.post('/api/profile', data={
            'title': 'Engineer', 'profileImage': image_file(),
        }, content_type='multipart/form-data')
        assert response.status_code == 400
        assert stored_uploads(app) == []
        assert admin_client.get('/api/profile').get_json()['image_path'] is None


class TestSkillsApi:
    """Tests for skill and technology endpoints."""

    def test_crud(self, admin_client):
        response = admin_client.post('/api/skills', json={'name': 'Python', 'category': 'Backend'})
        skill_id = response.get_json()['id']

        skill = admin_client.get(f'/api/skills/{skill_id}').get_json()
        assert skill['level'] == 'Intermediate'

        admin_client.put(f'/api/skills/{skill_id}', json={
            'name': 'Python', 'category': 'Backend', 'level': 'Expert'
        })
        assert admin_client.get(f'/api/skills/{skill_id}').get_json()['level'] == 'Expert'

        assert admin_client.delete(f'/api/skills/{skill_id}').status_code == 200
        assert admin_client.get(f'/api/skills/{skill_id}').status_code == 404

    def test_update_unknown_skill_is_404(self, admin_client):
        response = admin_client.put('/api/skills/999', json={'name': 'X', 'category': 'Y'})
        assert response.status_code == 404
        assert response.get_json() == {'success': False, 'message': 'Skill not found'}

    def test_non_object_json_body_is_rejected(self, admin_client):
        response = admin_client.post('/api/skills', json=[{'name': 'x'}])
        assert response.status_code == 400
        assert response.get_json()['message'] == 'Request body must be an object'
        assert admin_client.get('/api/skills').get_json() == []

    def test_grouped_skills(self, admin_client):
        for name, category in [('Java', 'Backend'), ('React', 'Frontend'), ('Spring', 'Backend')]:
            admin_client.post('/api/skills', json={'name': name, 'category': category})

        grouped = admin_client.get('/api/skills/grouped').get_json()
        assert [group['category'] for group in grouped] == ['Backend', 'Frontend']
        assert [skill['name'] for skill in grouped[0]['skills']] == ['Java', 'Spring']

    def test_technologies(self, admin_client):
        response = admin_client.post('/api/technologies', json={
            'name': 'MySQL', 'category': 'database', 'icon_class': 'devicon-mysql-plain'
        })
        technology_id = response.get_json()['id']
        assert admin_client.get('/api/technologies').get_json()[0]['name'] == 'MySQL'

        duplicate = admin_client.post('/api/technologies', json={'name': 'MySQL', 'category': 'database'})
        assert duplicate.status_code == 400

        admin_client.delete(f'/api/technologies/{technology_id}')
        assert admin_client.get('/api/technologies').get_json() == []


class TestProjectsApi:
    """Tests for project endpoints."""

    def test_add_with_form_technologies(self, admin_client, image_file):
        response = admin_client.post('/api/projects', data={
            'title': 'Portfolio', 'technologies': 'Java, MySQL', 'image': image_file(),
        }, content_type='multipart/form-data')
        assert response.status_code == 200

        project = admin_client.get('/api/projects').get_json()[0]
        assert project['tech'] == ['Java', 'MySQL']
        assert project['image_path'].startswith('uploads/images/')

    def test_add_with_repeated_form_fields(self, admin_client):
        admin_client.post('/api/projects', data={
            'title': 'Portfolio', 'technologies': ['Flask', 'SQLAlchemy'],
        }, content_type='multipart/form-data')
        assert admin_client.get('/api/projects').get_json()[0]['tech'] == ['Flask', 'SQLAlchemy']

    def test_update_clears_technologies_and_keeps_image(self, admin_client, image_file):
        project_id = admin_client.post('/api/projects', data={
            'title': 'Portfolio', 'technologies': 'Java, MySQL', 'image': image_file(),
        }, content_type='multipart/form-data').get_json()['id']
        image_path = admin_client.get('/api/projects').get_json()[0]['image_path']

        response = admin_client.put(f'/api/projects/{project_id}', json={
            'title': 'Portfolio v2', 'status': 'updating', 'technologies': []
        })
        assert response.status_code == 200

        project = admin_client.get('/api/projects').get_json()[0]
        assert project['title'] == 'Portfolio v2'
        assert project['status'] == 'updating'
        assert project['tech'] == []
        assert project['image_path'] == image_path

    def test_missing_title(self, admin_client):
        response = admin_client.post('/api/projects', json={'technologies': ['Java']})
        assert response.status_code == 400
        assert 'title' in response.get_json()['message']

    def test_delete(self, admin_client):
        project_id = admin_client.post('/api/projects', json={'title': 'Temp'}).get_json()['id']
        assert admin_client.delete(f'/api/projects/{project_id}').status_code == 200
        assert admin_client.get('/api/projects').get_json() == []
        assert admin_client.delete(f'/api/projects/{project_id}').status_code == 404

    def test_update_of_unknown_project_leaves_no_upload(self, app, admin_client, image_file):
        response = admin_client.put('/api/projects/999', data={
            'title': 'Ghost', 'image': image_file(),
        }, content_type='multipart/form-data')
        assert response.status_code == 404
        assert stored_uploads(app) == []


class TestCertificatesApi:
    """Tests for certificate endpoints."""

    def test_add_computes_duration_and_stores_pdf(self, admin_client, pdf_file):
        response = admin_client.post('/api/certificates', data={
            'title': 'Cloud', 'issuer': 'AWS', 'from_date': '2024-01-01', 'to_date': '2024-04-01',
            'duration': '5 years', 'pdf': pdf_file(),
        }, content_type='multipart/form-data')
        assert response.status_code == 200

        certificate = admin_client.get('/api/certificates').get_json()[0]
        assert certificate['duration'] == '3 months 1 day'
        assert certificate['pdf_path'].startswith('uploads/pdfs/')
        assert certificate['pdf_path'].endswith('.pdf')

    def test_update_recomputes_duration(self, admin_client):
        certificate_id = admin_client.post('/api/certificates', json={
            'title': 'Cloud', 'issuer': 'AWS', 'from_date': '2024-01-01', 'to_date': '2024-04-01',
        }).get_json()['id']

        admin_client.put(f'/api/certificates/{certificate_id}', json={
            'title': 'Cloud', 'issuer': 'AWS', 'from_date': '2024-01-01', 'to_date': '2024-01-10',
        })
        assert admin_client.get('/api/certificates').get_json()[0]['duration'] == '9 days'

    def test_rejects_image_as_pdf(self, admin_client, image_file):
        response = admin_client.post('/api/certificates', data={
            'title': 'Cloud', 'issuer': 'AWS', 'from_date': '2024-01-01', 'to_date': '2024-04-01',
            'pdf': image_file(),
        }, content_type='multipart/form-data')
        assert response.status_code == 400
        assert admin_client.get('/api/certificates').get_json() == []


class TestMessagesApi:
    """Tests for the contact form and message administration."""

    def test_contact_form_and_admin_listing(self, client):
        response = client.post('/api/contact', json={
            'name': 'Grace', 'email': 'grace@example.com', 'message': 'Hi there'
        })
        assert response.status_code == 200
        assert response.get_json()['message'] == 'Message sent successfully!'

        client.post('/api/login', json={'username': 'admin', 'password': 'admin123'})
        messages = client.get('/api/messages').get_json()
        assert len(messages) == 1
        assert messages[0]['subject'] == 'No subject'
        assert messages[0]['ip_address'] == '127.0.0.1'

        assert client.delete(f"/api/messages/{messages[0]['id']}").status_code == 200
        assert client.get('/api/messages').get_json() == []

    def test_contact_form_accepts_form_encoding(self, client):
        response = client.post('/api/contact', data={
            'name': 'Grace', 'email': 'grace@example.com', 'subject': 'Hello', 'message': 'Hi'
        })
        assert response.status_code == 200

    def test_contact_requires_message(self, client):
        response = client.post('/api/contact', json={'name': 'Grace', 'email': 'grace@example.com'})
        assert response.status_code == 400

    def test_contact_rejects_non_object_body(self, client):
        response = client.post('/api/contact', json='hello')
        assert response.status_code == 400


class TestDashboardApi:
    """Tests for the dashboard counts endpoint."""

    def test_counts(self, admin_client):
        admin_client.post('/api/projects', json={'title': 'A'})
        admin_client.post('/api/skills', json={'name': 'Python', 'category': 'Backend'})
        admin_client.post('/api/contact', json={'name': 'G', 'email': 'g@example.com', 'message': 'hi'})

        assert admin_client.get('/api/dashboard').get_json() == {
            'total_projects': 1, 'total_certificates': 0,
            'total_messages': 1, 'total_skills': 1,
        }


class TestPublicPage:
    """Tests for the server-rendered public page."""

    def test_renders_defaults_on_empty_store(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert b'Your Name' in response.data

    def test_renders_content(self, admin_client):
        admin_client.post('/api/profile', json={'name': 'Ada Lovelace', 'title': 'Engineer'})
        admin_client.post('/api/skills', json={'name': 'Python', 'category': 'Backend'})
        admin_client.post('/api/projects', json={'title': 'Analytical Engine', 'technologies': ['Punch Cards']})

        page = admin_client.get('/').data
        assert b'Ada Lovelace' in page
        assert b'Backend' in page
        assert b'Analytical Engine' in page
        assert b'Punch Cards' in page
