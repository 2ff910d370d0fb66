from portfolio import db
from portfolio.utils.helpers import utc_now

PROJECT_STATUSES = ('completed', 'development', 'updating')
DEFAULT_PROJECT_STATUS = 'development'

class Project(db.Model):
    __tablename__ = 'projects'
    
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    status = db.Column(db.String(20), default=DEFAULT_PROJECT_STATUS)
    image_path = db.Column(db.String(255))
    github_url = db.Column(db.String(255), default='')
    demo_url = db.Column(db.String(255), default='')
    display_order = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=utc_now)
    
    technologies = db.relationship(
        'ProjectTechnology',
        backref='project',
        order_by='ProjectTechnology.sort_index',
        cascade='all, delete-orphan'
    )
    
    @property
    def tech(self):
        return [link.technology for link in self.technologies]
    
    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'status': self.status,
            'image_path': self.image_path,
            'github_url': self.github_url,
            'demo_url': self.demo_url,
            'display_order': self.display_order,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'tech': self.tech,
        }
    
    def __repr__(self):
        return f'<Project {self.title}>'


class ProjectTechnology(db.Model):
    __tablename__ = 'project_technologies'
    
    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False, index=True)
    technology = db.Column(db.String(100), nullable=False)
    sort_index = db.Column(db.Integer, nullable=False, default=0)
    
    def __repr__(self):
        return f'<ProjectTechnology Project:{self.project_id} {self.technology}>'
