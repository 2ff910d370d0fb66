from flask import request
from flask_login import current_user

from portfolio import db
from portfolio.services.audit import AuditTrail
from portfolio.services.content_store import ContentStore, group_skills_by_category


def get_store():
    """Content store for the current request, auditing as the logged-in admin."""
    actor_id = current_user.id if current_user.is_authenticated else None
    audit = AuditTrail(db.session, actor_id=actor_id, source_ip=request.remote_addr)
    return ContentStore(db.session, audit=audit)


__all__ = ['AuditTrail', 'ContentStore', 'get_store', 'group_skills_by_category']
