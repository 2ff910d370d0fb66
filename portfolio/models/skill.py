from portfolio import db
from portfolio.utils.helpers import utc_now

SKILL_LEVELS = ('Beginner', 'Intermediate', 'Advanced', 'Expert')
DEFAULT_SKILL_LEVEL = 'Intermediate'

class Skill(db.Model):
    __tablename__ = 'skills'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    level = db.Column(db.String(20), default=DEFAULT_SKILL_LEVEL)
    icon = db.Column(db.String(255), default='')
    technology_id = db.Column(db.Integer, db.ForeignKey('technologies.id', ondelete='SET NULL'))
    display_order = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=utc_now)
    
    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'level': self.level,
            'icon': self.icon,
            'technology_id': self.technology_id,
            'display_order': self.display_order,
        }
    
    def __repr__(self):
        return f'<Skill {self.name}>'
