import logging
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import SQLAlchemyError

db = SQLAlchemy()
logger = logging.getLogger(__name__)

# first, then second
PRESENTER_EMAIL_FIELDS = ("first_presenter_email", "second_presenter_email")
SESSION_ATTRIBUTES = ("title", "description") + PRESENTER_EMAIL_FIELDS


def _utcnow():
    return datetime.now(timezone.utc)


class Session(db.Model):
    __tablename__ = 'sessions'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    first_presenter_email = db.Column(db.String(100))
    second_presenter_email = db.Column(db.String(100))
    created_at = db.Column(db.DateTime, default=_utcnow)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow)
    presenters = db.relationship('Presenter', backref='session', lazy=True,
                                 cascade='all, delete-orphan',
                                 order_by='Presenter.position')

    def assign_attributes(self, attributes):
        for name in SESSION_ATTRIBUTES:
            if name in attributes:
                value = (attributes[name] or '').strip()
                setattr(self, name, value or None)

    def presenter_emails(self):
        emails = []
        for field in PRESENTER_EMAIL_FIELDS:
            email = getattr(self, field)
            if email:
                emails.append(email)
        return emails

    def build_presenters(self):
        """Derive one Presenter per filled-in presenter email slot."""
        presenters = []
        for position, field in enumerate(PRESENTER_EMAIL_FIELDS, start=1):
            email = getattr(self, field)
            if email:
                presenters.append(Presenter(email=email, position=position))
        self.presenters = presenters
        return presenters

    def validation_errors(self):
        errors = {}
        if not self.title:
            errors['title'] = "Title is required."
        return errors

    def save(self):
        """Validate and commit. Returns False instead of raising when the save is rejected."""
        errors = self.validation_errors()
        if errors:
            logger.info(f"Session not saved, invalid fields: {sorted(errors)}")
            return False
        try:
            db.session.add(self)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error saving session: {e}")
            return False
        return True

    def update_attributes(self, attributes):
        self.assign_attributes(attributes)
        return self.save()

    def __repr__(self):
        return f"<Session {self.id} {self.title!r}>"


class Presenter(db.Model):
    __tablename__ = 'presenters'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(100), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=1)
    session_id = db.Column(db.Integer, db.ForeignKey('sessions.id'), nullable=False)


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(100), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    roles = db.Column(db.String(100), nullable=False, default='')

    @property
    def role_names(self):
        return [role.strip() for role in (self.roles or '').split(',') if role.strip()]

    def has_role(self, *roles):
        return any(role in self.role_names for role in roles)
