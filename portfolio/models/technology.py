from portfolio import db
from portfolio.utils.helpers import utc_now

TECHNOLOGY_CATEGORIES = ('database', 'language', 'frontend', 'backend')

class Technology(db.Model):
    __tablename__ = 'technologies'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    category = db.Column(db.String(50), nullable=False)
    icon_class = db.Column(db.String(100))
    icon_url = db.Column(db.String(255))
    is_custom = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=utc_now)
    
    skills = db.relationship('Skill', backref='technology', lazy='dynamic')
    
    __table_args__ = (db.UniqueConstraint('name', 'category', name='unique_technology_category'),)
    
    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'icon_class': self.icon_class,
            'icon_url': self.icon_url,
            'is_custom': bool(self.is_custom),
        }
    
    def __repr__(self):
        return f'<Technology {self.category}:{self.name}>'
