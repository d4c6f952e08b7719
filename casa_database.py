# casa_database.py

import re
from datetime import datetime, timezone
from typing import Iterable, Optional

from flask_login import UserMixin

from extensions import db
from utils.datetime_utils import utc_now, ensure_utc

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def slugify_case_number(case_number: str) -> str:
    """
    Turn a case number such as 'CINA-21-1001' into 'cina-21-1001'.

    All-digit results get a 'case-' prefix so a slug is never mistaken
    for a primary key in a URL.
    """
    slug = re.sub(r'[^a-z0-9]+', '-', (case_number or '').lower()).strip('-')
    if slug.isdigit():
        slug = f'case-{slug}'
    return slug


def current_supervisor_volunteer(records: Iterable['SupervisorVolunteer']) -> Optional['SupervisorVolunteer']:
    """
    Pick the supervision record that is in force right now.

    Only active records are considered. Normally there is at most one; if
    several are flagged active the most recently created wins.
    """
    active = [record for record in records if record.is_active]
    if not active:
        return None
    return max(
        active,
        key=lambda record: (
            ensure_utc(record.created_at) if record.created_at else _EPOCH,
            record.id or 0
        )
    )


# --- Organizations ---
class CasaOrg(db.Model):
    __tablename__ = 'casa_orgs'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), unique=True, nullable=False)
    display_name = db.Column(db.String(255), nullable=True)
    fund_request_email = db.Column(db.String(120), nullable=True)  # Falls back to app config
    created_at = db.Column(db.DateTime, default=utc_now)

    users = db.relationship('User', back_populates='casa_org', lazy=True)
    casa_cases = db.relationship('CasaCase', back_populates='casa_org', lazy=True)


# --- Users (single table, polymorphic on `type`) ---
class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=True)
    display_name = db.Column(db.String(255), nullable=False, default='')  # Stored verbatim
    active = db.Column(db.Boolean, nullable=False, default=True)
    casa_org_id = db.Column(db.Integer, db.ForeignKey('casa_orgs.id'), nullable=False)
    type = db.Column(db.String(50), nullable=False)
    created_at = db.Column(db.DateTime, default=utc_now)
    last_sign_in_at = db.Column(db.DateTime, nullable=True)

    casa_org = db.relationship('CasaOrg', back_populates='users')

    __mapper_args__ = {
        'polymorphic_on': type,
        'polymorphic_identity': 'User',
    }

    ROLE = 'User'

    # Flask-Login: deactivated users cannot sign in
    @property
    def is_active(self):
        return bool(self.active)

    @property
    def role(self) -> str:
        return self.ROLE

    @property
    def is_volunteer(self) -> bool:
        return False

    @property
    def is_supervisor(self) -> bool:
        return False

    @property
    def is_casa_admin(self) -> bool:
        return False

    def __repr__(self):
        return f"<{self.role} {self.id} {self.email}>"


class Volunteer(User):
    __mapper_args__ = {'polymorphic_identity': 'Volunteer'}

    ROLE = 'Volunteer'

    case_assignments = db.relationship(
        'CaseAssignment', back_populates='volunteer', lazy=True,
        foreign_keys='CaseAssignment.volunteer_id'
    )
    supervisor_volunteers = db.relationship(
        'SupervisorVolunteer', back_populates='volunteer', lazy=True,
        foreign_keys='SupervisorVolunteer.volunteer_id'
    )
    case_contacts = db.relationship(
        'CaseContact', back_populates='creator', lazy=True,
        foreign_keys='CaseContact.creator_id'
    )

    @property
    def is_volunteer(self) -> bool:
        return True

    @property
    def current_supervisor_volunteer(self) -> Optional['SupervisorVolunteer']:
        return current_supervisor_volunteer(self.supervisor_volunteers)

    @property
    def supervisor(self) -> Optional['Supervisor']:
        record = self.current_supervisor_volunteer
        return record.supervisor if record else None

    def has_supervisor(self) -> bool:
        """True when an active supervision record exists for this volunteer."""
        return self.current_supervisor_volunteer is not None

    def supervised_by(self, supervisor) -> bool:
        """
        True only for the supervisor on the active supervision record.
        Supervisors who had the volunteer in the past do not count.
        """
        record = self.current_supervisor_volunteer
        if record is None or supervisor is None:
            return False
        supervisor_id = getattr(supervisor, 'id', supervisor)
        return record.supervisor_id == supervisor_id


class Supervisor(User):
    __mapper_args__ = {'polymorphic_identity': 'Supervisor'}

    ROLE = 'Supervisor'

    supervisor_volunteers = db.relationship(
        'SupervisorVolunteer', back_populates='supervisor', lazy=True,
        foreign_keys='SupervisorVolunteer.supervisor_id'
    )

    @property
    def is_supervisor(self) -> bool:
        return True


class CasaAdmin(User):
    __mapper_args__ = {'polymorphic_identity': 'CasaAdmin'}

    ROLE = 'Casa Admin'

    @property
    def is_casa_admin(self) -> bool:
        return True


# --- Cases ---
class CasaCase(db.Model):
    __tablename__ = 'casa_cases'
    __table_args__ = (
        db.UniqueConstraint('case_number', 'casa_org_id', name='uq_casa_cases_case_number_org'),
        db.UniqueConstraint('slug', 'casa_org_id', name='uq_casa_cases_slug_org'),
    )

    id = db.Column(db.Integer, primary_key=True)
    case_number = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(120), nullable=False)  # Unique within the organization
    casa_org_id = db.Column(db.Integer, db.ForeignKey('casa_orgs.id'), nullable=False)
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=utc_now)

    casa_org = db.relationship('CasaOrg', back_populates='casa_cases')
    case_assignments = db.relationship('CaseAssignment', back_populates='casa_case', lazy=True)
    case_contacts = db.relationship('CaseContact', back_populates='casa_case', lazy=True)
    fund_requests = db.relationship('FundRequest', back_populates='casa_case', lazy=True)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.slug and self.case_number:
            self.slug = slugify_case_number(self.case_number)


class CaseAssignment(db.Model):
    __tablename__ = 'case_assignments'

    id = db.Column(db.Integer, primary_key=True)
    casa_case_id = db.Column(db.Integer, db.ForeignKey('casa_cases.id'), nullable=False)
    volunteer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=utc_now)

    casa_case = db.relationship('CasaCase', back_populates='case_assignments')
    volunteer = db.relationship('Volunteer', back_populates='case_assignments', foreign_keys=[volunteer_id])


class SupervisorVolunteer(db.Model):
    __tablename__ = 'supervisor_volunteers'

    id = db.Column(db.Integer, primary_key=True)
    supervisor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    volunteer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=utc_now)

    supervisor = db.relationship('Supervisor', back_populates='supervisor_volunteers', foreign_keys=[supervisor_id])
    volunteer = db.relationship('Volunteer', back_populates='supervisor_volunteers', foreign_keys=[volunteer_id])


class CaseContact(db.Model):
    __tablename__ = 'case_contacts'

    id = db.Column(db.Integer, primary_key=True)
    casa_case_id = db.Column(db.Integer, db.ForeignKey('casa_cases.id'), nullable=False)
    creator_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    occurred_at = db.Column(db.Date, nullable=False)
    contact_made = db.Column(db.Boolean, nullable=False, default=False)  # False = attempt only
    medium_type = db.Column(db.String(50), nullable=True)  # 'in-person', 'text/email', 'video', ...
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utc_now)

    casa_case = db.relationship('CasaCase', back_populates='case_contacts')
    creator = db.relationship('Volunteer', back_populates='case_contacts', foreign_keys=[creator_id])


# --- Fund requests ---
class FundRequest(db.Model):
    __tablename__ = 'fund_requests'

    # Form fields a submitter may set; anything else in the request is ignored
    PERMITTED_FIELDS = (
        'submitter_email',
        'youth_name',
        'payment_amount',
        'deadline',
        'request_purpose',
        'payee_name',
        'requested_by_and_relationship',
        'other_funding_source_sought',
        'impact',
        'extra_information',
    )

    id = db.Column(db.Integer, primary_key=True)
    casa_case_id = db.Column(db.Integer, db.ForeignKey('casa_cases.id'), nullable=True)
    submitter_email = db.Column(db.String(120), nullable=False)
    youth_name = db.Column(db.String(255), nullable=True)
    payment_amount = db.Column(db.String(100), nullable=True)
    deadline = db.Column(db.String(100), nullable=True)
    request_purpose = db.Column(db.Text, nullable=True)
    payee_name = db.Column(db.String(255), nullable=True)
    requested_by_and_relationship = db.Column(db.String(255), nullable=True)
    other_funding_source_sought = db.Column(db.Text, nullable=True)
    impact = db.Column(db.Text, nullable=True)
    extra_information = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utc_now)

    casa_case = db.relationship('CasaCase', back_populates='fund_requests')
