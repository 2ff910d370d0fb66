"""
Content store and view assembler for the portfolio.

Translates between database rows and the JSON shapes the admin panel and the
public page consume:

- the profile singleton, falling back to placeholder values when absent
- skills, technologies, projects, certificates and contact messages
- project technology tags kept as an ordered join table
- certificate durations derived from their dates on every write
- uploaded file paths that only replace a stored path when a new file arrives

Every database failure is rolled back and surfaced as StorageUnavailable.
Updates and deletes of a missing id raise NotFound.
"""

import logging
from collections.abc import Mapping
from contextlib import contextmanager

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from portfolio.errors import NotFound, StorageUnavailable, ValidationError
from portfolio.models import (
    Certificate, Message, Profile, Project, ProjectTechnology, Skill, Technology
)
from portfolio.models.message import DEFAULT_SUBJECT
from portfolio.models.profile import DEFAULT_PROFILE, PLACEHOLDER_NAME, PLACEHOLDER_TITLE
from portfolio.models.project import DEFAULT_PROJECT_STATUS
from portfolio.models.skill import DEFAULT_SKILL_LEVEL
from portfolio.services.audit import NullAuditTrail
from portfolio.utils.helpers import calculate_duration, parse_date, split_technologies

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    'name', 'title', 'punchline', 'about', 'email', 'phone', 'location',
    'github_url', 'linkedin_url', 'twitter_url',
)


def _value(fields, key, default=None):
    value = fields.get(key)
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == '':
        return default
    return value


def _require(fields, *keys):
    missing = [key for key in keys if _value(fields, key) is None]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def _int_value(fields, key, default=None):
    value = _value(fields, key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{key} must be an integer')


def group_skills_by_category(skills):
    """Group skills by their category label.

    Categories appear in first-seen order and each keeps the input's
    relative order of skills. Accepts dicts or Skill rows.
    """
    grouped = {}
    for skill in skills:
        category = skill['category'] if isinstance(skill, Mapping) else skill.category
        grouped.setdefault(category, []).append(skill)
    return grouped


class ContentStore:

    def __init__(self, session, audit=None):
        self.session = session
        self.audit = audit or NullAuditTrail()

    @contextmanager
    def _storage(self, operation):
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f'{operation} failed: {e}')
            raise StorageUnavailable(f'Storage unavailable during {operation}') from e
        except Exception:
            self.session.rollback()
            raise

    def _get_or_404(self, model, row_id, label):
        row = self.session.get(model, row_id)
        if row is None:
            raise NotFound(f'{label} not found')
        return row

    # Profile

    def _profile_row(self):
        return self.session.scalars(select(Profile).order_by(Profile.id).limit(1)).first()

    def get_profile(self):
        with self._storage('get_profile'):
            profile = self._profile_row()
            if profile is None:
                return dict(DEFAULT_PROFILE)
            return profile.to_dict()

    def upsert_profile(self, fields, new_image_path=None):
        _require(fields, 'name', 'title')

        with self._storage('upsert_profile'):
            profile = self._profile_row()
            if profile is None:
                profile = Profile(image_path=new_image_path)
                self.session.add(profile)
            elif new_image_path:
                profile.image_path = new_image_path

            for key in PROFILE_FIELDS:
                setattr(profile, key, _value(fields, key))

            self.session.commit()
            result = profile.to_dict()

        self.audit.record('PROFILE_UPDATE', 'Profile updated')
        return result

    def set_resume(self, resume_path):
        with self._storage('set_resume'):
            profile = self._profile_row()
            if profile is None:
                profile = Profile(name=PLACEHOLDER_NAME, title=PLACEHOLDER_TITLE)
                self.session.add(profile)
            profile.resume_path = resume_path
            self.session.commit()
            result = profile.to_dict()

        self.audit.record('RESUME_UPLOAD', 'Resume uploaded')
        return result

    def clear_resume(self):
        with self._storage('clear_resume'):
            profile = self._profile_row()
            if profile is not None:
                profile.resume_path = None
                self.session.commit()

        self.audit.record('RESUME_DELETE', 'Resume deleted')

    # Skills

    def list_skills(self):
        with self._storage('list_skills'):
            skills = self.session.scalars(
                select(Skill).order_by(Skill.display_order, Skill.id)
            ).all()
            return [skill.to_dict() for skill in skills]

    def get_skill(self, skill_id):
        with self._storage('get_skill'):
            return self._get_or_404(Skill, skill_id, 'Skill').to_dict()

    def add_skill(self, fields):
        _require(fields, 'name', 'category')

        with self._storage('add_skill'):
            skill = Skill(
                name=_value(fields, 'name'),
                category=_value(fields, 'category'),
                level=_value(fields, 'level', DEFAULT_SKILL_LEVEL),
                icon=_value(fields, 'icon', ''),
                technology_id=_int_value(fields, 'technology_id'),
                display_order=_int_value(fields, 'display_order', 0)
            )
            self.session.add(skill)
            self.session.commit()
            skill_id = skill.id
            name = skill.name

        self.audit.record('SKILL_ADD', f'Added skill: {name}')
        return skill_id

    def update_skill(self, skill_id, fields):
        _require(fields, 'name', 'category')

        with self._storage('update_skill'):
            skill = self._get_or_404(Skill, skill_id, 'Skill')
            skill.name = _value(fields, 'name')
            skill.category = _value(fields, 'category')
            skill.level = _value(fields, 'level', DEFAULT_SKILL_LEVEL)
            skill.icon = _value(fields, 'icon', '')
            skill.technology_id = _int_value(fields, 'technology_id')
            skill.display_order = _int_value(fields, 'display_order', skill.display_order or 0)
            self.session.commit()

        self.audit.record('SKILL_UPDATE', f'Updated skill ID: {skill_id}')

    def delete_skill(self, skill_id):
        with self._storage('delete_skill'):
            skill = self._get_or_404(Skill, skill_id, 'Skill')
            self.session.delete(skill)
            self.session.commit()

        self.audit.record('SKILL_DELETE', f'Deleted skill ID: {skill_id}')

    # Technologies

    def list_technologies(self):
        with self._storage('list_technologies'):
            technologies = self.session.scalars(
                select(Technology).order_by(Technology.category, Technology.name)
            ).all()
            return [technology.to_dict() for technology in technologies]

    def add_technology(self, fields):
        _require(fields, 'name', 'category')
        icon_url = _value(fields, 'icon_url')

        with self._storage('add_technology'):
            name = _value(fields, 'name')
            category = _value(fields, 'category')
            technology = Technology(
                name=name,
                category=category,
                icon_class=_value(fields, 'icon_class'),
                icon_url=icon_url,
                is_custom=bool(icon_url)
            )
            self.session.add(technology)
            try:
                self.session.commit()
            except IntegrityError:
                self.session.rollback()
                raise ValidationError(
                    f"Technology '{name}' already exists in {category}"
                )
            technology_id = technology.id

        self.audit.record('TECH_CREATE', f'Created technology: {name}')
        return technology_id

    def delete_technology(self, technology_id):
        with self._storage('delete_technology'):
            technology = self._get_or_404(Technology, technology_id, 'Technology')
            for skill in technology.skills:
                skill.technology_id = None
            self.session.delete(technology)
            self.session.commit()

        self.audit.record('TECH_DELETE', f'Deleted technology ID: {technology_id}')

    # Projects

    def list_projects(self):
        with self._storage('list_projects'):
            projects = self.session.scalars(
                select(Project)
                .options(selectinload(Project.technologies))
                .order_by(Project.display_order, Project.created_at.desc(), Project.id.desc())
            ).all()
            return [project.to_dict() for project in projects]

    def _replace_technologies(self, project, technology_names):
        project.technologies.clear()
        self.session.flush()
        for index, name in enumerate(split_technologies(technology_names)):
            project.technologies.append(ProjectTechnology(technology=name, sort_index=index))

    def add_project(self, fields, technology_names=None, new_image_path=None):
        _require(fields, 'title')

        with self._storage('add_project'):
            project = Project(
                title=_value(fields, 'title'),
                description=_value(fields, 'description'),
                status=_value(fields, 'status', DEFAULT_PROJECT_STATUS),
                image_path=new_image_path,
                github_url=_value(fields, 'github_url', ''),
                demo_url=_value(fields, 'demo_url', ''),
                display_order=_int_value(fields, 'display_order', 0)
            )
            self.session.add(project)
            self.session.flush()
            self._replace_technologies(project, technology_names)
            self.session.commit()
            project_id = project.id
            title = project.title

        self.audit.record('PROJECT_ADD', f'Added project: {title}')
        return project_id

    def update_project(self, project_id, fields, technology_names=None, new_image_path=None):
        _require(fields, 'title')

        with self._storage('update_project'):
            project = self._get_or_404(Project, project_id, 'Project')
            project.title = _value(fields, 'title')
            project.description = _value(fields, 'description')
            project.status = _value(fields, 'status', DEFAULT_PROJECT_STATUS)
            project.github_url = _value(fields, 'github_url', '')
            project.demo_url = _value(fields, 'demo_url', '')
            project.display_order = _int_value(fields, 'display_order', project.display_order or 0)
            if new_image_path:
                project.image_path = new_image_path

            self._replace_technologies(project, technology_names)
            self.session.commit()

        self.audit.record('PROJECT_UPDATE', f'Updated project ID: {project_id}')

    def delete_project(self, project_id):
        with self._storage('delete_project'):
            project = self._get_or_404(Project, project_id, 'Project')
            self.session.delete(project)
            self.session.commit()

        self.audit.record('PROJECT_DELETE', f'Deleted project ID: {project_id}')

    # Certificates

    def list_certificates(self):
        with self._storage('list_certificates'):
            certificates = self.session.scalars(
                select(Certificate).order_by(
                    Certificate.display_order, Certificate.created_at.desc(), Certificate.id.desc()
                )
            ).all()
            return [certificate.to_dict() for certificate in certificates]

    def _certificate_dates(self, fields):
        _require(fields, 'title', 'issuer')
        from_date = parse_date(fields.get('from_date'), 'from_date')
        to_date = parse_date(fields.get('to_date'), 'to_date')
        return from_date, to_date

    def add_certificate(self, fields, new_pdf_path=None):
        from_date, to_date = self._certificate_dates(fields)

        with self._storage('add_certificate'):
            certificate = Certificate(
                title=_value(fields, 'title'),
                issuer=_value(fields, 'issuer'),
                from_date=from_date,
                to_date=to_date,
                duration=calculate_duration(from_date, to_date),
                pdf_path=new_pdf_path,
                verification_url=_value(fields, 'verification_url', ''),
                display_order=_int_value(fields, 'display_order', 0)
            )
            self.session.add(certificate)
            self.session.commit()
            certificate_id = certificate.id
            title = certificate.title

        self.audit.record('CERTIFICATE_ADD', f'Added certificate: {title}')
        return certificate_id

    def update_certificate(self, certificate_id, fields, new_pdf_path=None):
        from_date, to_date = self._certificate_dates(fields)

        with self._storage('update_certificate'):
            certificate = self._get_or_404(Certificate, certificate_id, 'Certificate')
            certificate.title = _value(fields, 'title')
            certificate.issuer = _value(fields, 'issuer')
            certificate.from_date = from_date
            certificate.to_date = to_date
            certificate.duration = calculate_duration(from_date, to_date)
            certificate.verification_url = _value(fields, 'verification_url', '')
            certificate.display_order = _int_value(
                fields, 'display_order', certificate.display_order or 0
            )
            if new_pdf_path:
                certificate.pdf_path = new_pdf_path
            self.session.commit()

        self.audit.record('CERTIFICATE_UPDATE', f'Updated certificate ID: {certificate_id}')

    def delete_certificate(self, certificate_id):
        with self._storage('delete_certificate'):
            certificate = self._get_or_404(Certificate, certificate_id, 'Certificate')
            self.session.delete(certificate)
            self.session.commit()

        self.audit.record('CERTIFICATE_DELETE', f'Deleted certificate ID: {certificate_id}')

    # Messages

    def list_messages(self):
        with self._storage('list_messages'):
            messages = self.session.scalars(
                select(Message).order_by(Message.created_at.desc(), Message.id.desc())
            ).all()
            return [message.to_dict() for message in messages]

    def add_message(self, fields, submitter_ip=None):
        _require(fields, 'name', 'email', 'message')

        with self._storage('add_message'):
            message = Message(
                name=_value(fields, 'name'),
                email=_value(fields, 'email'),
                subject=_value(fields, 'subject', DEFAULT_SUBJECT),
                message=_value(fields, 'message'),
                ip_address=submitter_ip
            )
            self.session.add(message)
            self.session.commit()
            return message.to_dict()

    def delete_message(self, message_id):
        with self._storage('delete_message'):
            message = self._get_or_404(Message, message_id, 'Message')
            self.session.delete(message)
            self.session.commit()

        self.audit.record('MESSAGE_DELETE', f'Deleted message ID: {message_id}')

    # Dashboard

    def get_dashboard_stats(self):
        with self._storage('get_dashboard_stats'):
            def count(model):
                return self.session.scalar(select(func.count()).select_from(model))

            return {
                'total_projects': count(Project),
                'total_certificates': count(Certificate),
                'total_messages': count(Message),
                'total_skills': count(Skill),
            }
