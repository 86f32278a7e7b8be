from datetime import datetime
from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
import uuid

def get_now():
    return datetime.utcnow()

db = SQLAlchemy()

FORM_STATUS_ACTIVE = 'active'
FORM_STATUS_SUBMITTED = 'submitted'

class User(UserMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    supabase_uid = db.Column(db.String(100), unique=True, nullable=True)
    password_hash = db.Column(db.String(200), nullable=True) # Null when the account only exists in Supabase
    created_at = db.Column(db.DateTime, default=get_now)
    last_login = db.Column(db.DateTime, nullable=True)

    @property
    def owner_scope(self):
        """Identifier stored in form records; Supabase uid when linked, local id otherwise."""
        return self.supabase_uid or str(self.id)

class FormRecord(db.Model):
    __tablename__ = 'forms'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(100), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    form_data = db.Column(db.JSON, nullable=False, default=dict) # {...flat answers, "instances": {...}}
    status = db.Column(db.String(20), default=FORM_STATUS_ACTIVE) # active, submitted
    template_id = db.Column(db.String(50), nullable=True)

    # Public sharing
    public_id = db.Column(db.String(36), unique=True, nullable=True) # Assigned on first publish, never rotated
    is_public = db.Column(db.Boolean, default=False)
    author_name = db.Column(db.String(200), nullable=True)

    created_at = db.Column(db.DateTime, default=get_now)
    updated_at = db.Column(db.DateTime, default=get_now, onupdate=get_now)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'title': self.title,
            'form_data': self.form_data or {},
            'status': self.status,
            'template_id': self.template_id,
            'public_id': self.public_id,
            'is_public': bool(self.is_public),
            'author_name': self.author_name,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
