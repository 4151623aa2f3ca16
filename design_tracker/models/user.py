"""User model."""
from datetime import datetime
from design_tracker.extensions import db

ROLE_ADMIN = 'Admin'
ROLE_DESIGNER = 'Designer'
ROLE_USER = 'User'

VALID_ROLES = [ROLE_ADMIN, ROLE_DESIGNER, ROLE_USER]


class User(db.Model):
    __tablename__ = 'users'

    username = db.Column(db.String(80), primary_key=True)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)  # Admin, Designer, User
    name = db.Column(db.String(100))  # Display name, used when claiming requests
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'username': self.username,
            'role': self.role,
            'name': self.name,
        }
