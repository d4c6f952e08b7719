"""
VolunteerService - volunteer lifecycle, supervision and contact recency rules
"""

from datetime import date
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from flask_bcrypt import generate_password_hash
from repositories.volunteer_repository import VolunteerRepository
from repositories.case_assignment_repository import CaseAssignmentRepository
from repositories.supervisor_volunteer_repository import SupervisorVolunteerRepository
from repositories.case_contact_repository import CaseContactRepository
from repositories.user_repository import UserRepository
from services.common.result import Result
from casa_database import Volunteer, Supervisor
from utils.datetime_utils import trailing_date_window, DEFAULT_TIMEZONE
from logging_config import get_logger

logger = get_logger(__name__)

CONTACT_RECENCY_DAYS = 14


class VolunteerService:
    """Service for the volunteer aggregate using the Result pattern"""

    def __init__(self,
                 volunteer_repository: Optional[VolunteerRepository] = None,
                 case_assignment_repository: Optional[CaseAssignmentRepository] = None,
                 supervisor_volunteer_repository: Optional[SupervisorVolunteerRepository] = None,
                 case_contact_repository: Optional[CaseContactRepository] = None,
                 user_repository: Optional[UserRepository] = None,
                 timezone: str = DEFAULT_TIMEZONE):
        """
        Initialize with injected repositories.

        Args:
            volunteer_repository: Volunteer data access
            case_assignment_repository: CaseAssignment data access
            supervisor_volunteer_repository: Supervision record data access
            case_contact_repository: CaseContact data access
            user_repository: Used for email uniqueness and supervisor lookups
            timezone: Zone in which "today" is evaluated
        """
        if not all([volunteer_repository, case_assignment_repository,
                    supervisor_volunteer_repository, case_contact_repository]):
            raise ValueError("Volunteer repositories must be provided via dependency injection")
        self.volunteer_repository = volunteer_repository
        self.case_assignment_repository = case_assignment_repository
        self.supervisor_volunteer_repository = supervisor_volunteer_repository
        self.case_contact_repository = case_contact_repository
        self.user_repository = user_repository
        self.timezone = timezone

    def get_volunteer(self, volunteer_id: int) -> Result[Volunteer]:
        volunteer = self.volunteer_repository.get_by_id(volunteer_id)
        if volunteer is None:
            return Result.failure(f"Volunteer {volunteer_id} not found", code="NOT_FOUND")
        return Result.success(volunteer)

    # Registration

    def register_volunteer(self, casa_org_id: int, email: str, display_name: str,
                           password: Optional[str] = None) -> Result[Volunteer]:
        """
        Create an active volunteer in an organization.

        display_name is stored exactly as given.
        """
        email = (email or '').strip().lower()
        if not email:
            return Result.failure("Email is required", code="VALIDATION_ERROR")
        if self.user_repository and self.user_repository.find_by_email(email):
            return Result.failure(f"A user with email {email} already exists", code="DUPLICATE_EMAIL")

        password_hash = generate_password_hash(password).decode('utf-8') if password else None
        try:
            volunteer = self.volunteer_repository.create(
                email=email,
                display_name=display_name,
                casa_org_id=casa_org_id,
                password_hash=password_hash,
                active=True
            )
            self.volunteer_repository.commit()
        except IntegrityError:
            return Result.failure(f"A user with email {email} already exists", code="DUPLICATE_EMAIL")
        except SQLAlchemyError as e:
            return Result.failure(f"Failed to register volunteer: {e}", code="DATABASE_ERROR")

        logger.info("Volunteer registered", volunteer_id=volunteer.id, casa_org_id=casa_org_id)
        return Result.success(volunteer)

    # Activation

    def activate(self, volunteer_id: int) -> Result[Volunteer]:
        """Set active = True. Related records are left alone."""
        found = self.get_volunteer(volunteer_id)
        if found.is_failure:
            return found
        volunteer = found.data

        try:
            self.volunteer_repository.set_active(volunteer, True)
            self.volunteer_repository.commit()
        except SQLAlchemyError as e:
            return Result.failure(f"Failed to activate volunteer: {e}", code="DATABASE_ERROR")

        logger.info("Volunteer activated", volunteer_id=volunteer.id)
        return Result.success(volunteer)

    def deactivate(self, volunteer_id: int) -> Result[Volunteer]:
        """
        Set active = False and mark every case assignment of the volunteer
        inactive, committed together. A failure rolls back both updates.
        """
        found = self.get_volunteer(volunteer_id)
        if found.is_failure:
            return found
        volunteer = found.data

        try:
            self.volunteer_repository.set_active(volunteer, False)
            assignment_count = self.case_assignment_repository.deactivate_all_for_volunteer(volunteer.id)
            self.volunteer_repository.commit()
        except SQLAlchemyError as e:
            self.volunteer_repository.rollback()
            logger.error("Volunteer deactivation rolled back", volunteer_id=volunteer_id, error=str(e))
            return Result.failure(f"Failed to deactivate volunteer: {e}", code="DATABASE_ERROR")

        logger.info("Volunteer deactivated",
                    volunteer_id=volunteer.id,
                    case_assignments_deactivated=assignment_count)
        return Result.success(volunteer)

    # Supervision

    def has_supervisor(self, volunteer_id: int) -> bool:
        """True iff an active supervision record exists for the volunteer."""
        return self.supervisor_volunteer_repository.find_active_by_volunteer(volunteer_id) is not None

    def supervised_by(self, volunteer_id: int, supervisor_id: int) -> bool:
        """True iff the volunteer's active supervision record names this supervisor."""
        record = self.supervisor_volunteer_repository.find_active_by_volunteer(volunteer_id)
        return record is not None and record.supervisor_id == supervisor_id

    def assign_supervisor(self, volunteer_id: int, supervisor_id: int) -> Result:
        """
        Make supervisor_id the volunteer's current supervisor.

        Any active record for another supervisor is retired. An older record
        for the same pair is reactivated instead of duplicated.
        """
        found = self.get_volunteer(volunteer_id)
        if found.is_failure:
            return found
        volunteer = found.data

        supervisor = self.user_repository.get_by_id(supervisor_id) if self.user_repository else None
        if not isinstance(supervisor, Supervisor):
            return Result.failure(f"Supervisor {supervisor_id} not found", code="NOT_FOUND")
        if supervisor.casa_org_id != volunteer.casa_org_id:
            return Result.failure("Supervisor belongs to a different organization", code="ORG_MISMATCH")

        current = self.supervisor_volunteer_repository.find_active_by_volunteer(volunteer_id)
        if current is not None and current.supervisor_id == supervisor_id:
            return Result.success(current)

        try:
            self.supervisor_volunteer_repository.retire_active_for_volunteer(volunteer_id)
            record = self.supervisor_volunteer_repository.find_by_pair(supervisor_id, volunteer_id)
            if record is not None:
                self.supervisor_volunteer_repository.update(record, is_active=True)
            else:
                record = self.supervisor_volunteer_repository.create(
                    supervisor_id=supervisor_id,
                    volunteer_id=volunteer_id,
                    is_active=True
                )
            self.supervisor_volunteer_repository.commit()
        except SQLAlchemyError as e:
            self.supervisor_volunteer_repository.rollback()
            return Result.failure(f"Failed to assign supervisor: {e}", code="DATABASE_ERROR")

        logger.info("Supervisor assigned",
                    volunteer_id=volunteer_id,
                    supervisor_id=supervisor_id,
                    previous_supervisor_id=current.supervisor_id if current else None)
        return Result.success(record)

    def unassign_supervisor(self, volunteer_id: int) -> Result[int]:
        """Retire the volunteer's active supervision records."""
        try:
            retired = self.supervisor_volunteer_repository.retire_active_for_volunteer(volunteer_id)
            self.supervisor_volunteer_repository.commit()
        except SQLAlchemyError as e:
            self.supervisor_volunteer_repository.rollback()
            return Result.failure(f"Failed to unassign supervisor: {e}", code="DATABASE_ERROR")
        logger.info("Supervisor unassigned", volunteer_id=volunteer_id, records_retired=retired)
        return Result.success(retired)

    def with_no_supervisor(self, casa_org_id: int) -> List[Volunteer]:
        """Active volunteers of the organization nobody currently supervises."""
        return self.volunteer_repository.find_with_no_supervisor(casa_org_id)

    # Contact recency

    def made_contact_with_all_cases_in_14_days(self, volunteer_id: int,
                                               today: Optional[date] = None) -> bool:
        """
        Whether the volunteer logged a contact on every active case in the
        last 14 days, today included.

        Attempts count: a contact with contact_made = False satisfies the
        window. Use contact_made_with_all_cases_in_14_days for completed
        contacts only. True when there are no active assignments.
        """
        return self._all_active_cases_have_contact(volunteer_id, today, contact_made=None)

    def contact_made_with_all_cases_in_14_days(self, volunteer_id: int,
                                               today: Optional[date] = None) -> bool:
        """Like made_contact_with_all_cases_in_14_days, but attempts do not count."""
        return self._all_active_cases_have_contact(volunteer_id, today, contact_made=True)

    def cases_missing_recent_contact(self, volunteer_id: int,
                                     today: Optional[date] = None) -> List:
        """Active assignments with no contact of any kind in the window."""
        start, end = trailing_date_window(CONTACT_RECENCY_DAYS, today, self.timezone)
        return [
            assignment
            for assignment in self.case_assignment_repository.find_active_by_volunteer(volunteer_id)
            if not self.case_contact_repository.exists_for_case_and_creator(
                assignment.casa_case_id, volunteer_id, start, end
            )
        ]

    def _all_active_cases_have_contact(self, volunteer_id: int, today: Optional[date],
                                       contact_made: Optional[bool]) -> bool:
        start, end = trailing_date_window(CONTACT_RECENCY_DAYS, today, self.timezone)
        assignments = self.case_assignment_repository.find_active_by_volunteer(volunteer_id)
        return all(
            self.case_contact_repository.exists_for_case_and_creator(
                assignment.casa_case_id, volunteer_id, start, end, contact_made=contact_made
            )
            for assignment in assignments
        )
