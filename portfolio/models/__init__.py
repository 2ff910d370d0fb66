from portfolio.models.admin_user import AdminUser
from portfolio.models.profile import Profile
from portfolio.models.technology import Technology
from portfolio.models.skill import Skill
from portfolio.models.project import Project, ProjectTechnology
from portfolio.models.certificate import Certificate
from portfolio.models.message import Message
from portfolio.models.activity_log import ActivityLog

__all__ = [
    'AdminUser', 'Profile', 'Technology', 'Skill', 'Project',
    'ProjectTechnology', 'Certificate', 'Message', 'ActivityLog'
]
