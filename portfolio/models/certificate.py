from portfolio import db
from portfolio.utils.helpers import utc_now

class Certificate(db.Model):
    __tablename__ = 'certificates'
    
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    issuer = db.Column(db.String(200), nullable=False)
    from_date = db.Column(db.Date, nullable=False)
    to_date = db.Column(db.Date, nullable=False)
    duration = db.Column(db.String(50))
    pdf_path = db.Column(db.String(255))
    verification_url = db.Column(db.String(255), default='')
    display_order = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=utc_now)
    
    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'issuer': self.issuer,
            'from_date': self.from_date.isoformat() if self.from_date else None,
            'to_date': self.to_date.isoformat() if self.to_date else None,
            'duration': self.duration,
            'pdf_path': self.pdf_path,
            'verification_url': self.verification_url,
            'display_order': self.display_order,
        }
    
    def __repr__(self):
        return f'<Certificate {self.title}>'
