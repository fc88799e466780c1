import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .appointment import AppointmentRepository
from .doctor import DoctorRepository
from .doctor_schedule import DoctorScheduleRepository
from .patient import PatientRepository
from .user import UserRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Repositories sharing one session, persisted by a single commit."""

    def __init__(self, db: Session):
        self.db = db
        self.patients = PatientRepository(db)
        self.doctors = DoctorRepository(db)
        self.doctor_schedules = DoctorScheduleRepository(db)
        self.appointments = AppointmentRepository(db)
        self.users = UserRepository(db)

    def commit(self) -> None:
        """Persist all pending changes atomically, rolling back on failure."""
        try:
            self.db.commit()
        except SQLAlchemyError:
            logger.exception("Commit failed, rolling back")
            self.db.rollback()
            raise

    def refresh(self, entity) -> None:
        self.db.refresh(entity)
