from portfolio import db
from portfolio.utils.helpers import utc_now

DEFAULT_PROFILE = {
    'id': None,
    'name': 'Your Name',
    'title': 'Backend Engineer',
    'punchline': 'Building amazing things',
    'about': 'About me...',
    'email': 'email@example.com',
    'phone': '+1234567890',
    'location': 'City, Country',
    'image_path': None,
    'resume_path': None,
    'github_url': None,
    'linkedin_url': None,
    'twitter_url': None,
}

PLACEHOLDER_NAME = 'Your Name'
PLACEHOLDER_TITLE = 'Your Title'

class Profile(db.Model):
    __tablename__ = 'profile'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    punchline = db.Column(db.String(255))
    about = db.Column(db.Text)
    email = db.Column(db.String(120))
    phone = db.Column(db.String(30))
    location = db.Column(db.String(120))
    image_path = db.Column(db.String(255))
    resume_path = db.Column(db.String(255))
    github_url = db.Column(db.String(255))
    linkedin_url = db.Column(db.String(255))
    twitter_url = db.Column(db.String(255))
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now)
    
    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'title': self.title,
            'punchline': self.punchline,
            'about': self.about,
            'email': self.email,
            'phone': self.phone,
            'location': self.location,
            'image_path': self.image_path,
            'resume_path': self.resume_path,
            'github_url': self.github_url,
            'linkedin_url': self.linkedin_url,
            'twitter_url': self.twitter_url,
        }
    
    def __repr__(self):
        return f'<Profile {self.name}>'
