from datetime import datetime
from typing import Optional
import logging

from ..core.exceptions import InvalidStateTransitionError, NotFoundError, ValidationError
from ..core.logging import LOG_TYPE_CANCELLATION
from ..models.appointment import Appointment, AppointmentStatus
from ..repositories.unit_of_work import UnitOfWork
from ..schemas.appointment import AppointmentCreate

logger = logging.getLogger(__name__)

class AppointmentService:
    """Appointment lifecycle.

    Appointments are created as ``Scheduled``. Rescheduling keeps them
    ``Scheduled``; cancelling and completing move them to a terminal status.
    Every transition requires the appointment to still be ``Scheduled``.
    """

    def __init__(self, uow: UnitOfWork, audit_logger: Optional[logging.Logger] = None):
        self.uow = uow
        self.audit_logger = audit_logger or logger

    def _get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.uow.appointments.get_by_id(appointment_id)
        if not appointment:
            raise NotFoundError(f"Appointment {appointment_id} not found")
        return appointment

    @staticmethod
    def _ensure_scheduled(appointment: Appointment, message: str) -> None:
        if appointment.status != AppointmentStatus.SCHEDULED:
            logger.info(
                f"Rejected transition for appointment {appointment.id} in status {appointment.status.value}"
            )
            raise InvalidStateTransitionError(message)

    def create(self, data: AppointmentCreate) -> Appointment:
        if not self.uow.patients.exists(data.patient_id):
            raise ValidationError(f"Patient {data.patient_id} does not exist")
        if not self.uow.doctors.exists(data.doctor_id):
            raise ValidationError(f"Doctor {data.doctor_id} does not exist")

        appointment = Appointment(
            patient_id=data.patient_id,
            doctor_id=data.doctor_id,
            appointment_date=data.appointment_date,
            description=data.description,
            status=AppointmentStatus.SCHEDULED,
            created_at=datetime.utcnow(),
        )
        self.uow.appointments.add(appointment)
        self.uow.commit()
        self.uow.refresh(appointment)

        logger.info(f"Created appointment {appointment.id} for patient {appointment.patient_id} with doctor {appointment.doctor_id}")
        return appointment

    def reschedule(self, appointment_id: int, new_date: datetime) -> Appointment:
        appointment = self._get_appointment(appointment_id)
        self._ensure_scheduled(appointment, "Cannot reschedule a completed or cancelled appointment.")

        appointment.appointment_date = new_date
        self.uow.appointments.update(appointment)
        self.uow.commit()
        return appointment

    def cancel(self, appointment_id: int, reason: Optional[str] = None) -> Appointment:
        appointment = self._get_appointment(appointment_id)
        self._ensure_scheduled(appointment, "Only scheduled appointments can be cancelled.")

        appointment.status = AppointmentStatus.CANCELLED
        self.uow.appointments.update(appointment)
        self.uow.commit()

        self.audit_logger.info(
            f"Appointment {appointment.id} cancelled",
            extra={
                "log_type": LOG_TYPE_CANCELLATION,
                "appointment_id": appointment.id,
                "reason": reason,
            },
        )
        return appointment

    def complete(self, appointment_id: int, notes: Optional[str] = None) -> Appointment:
        appointment = self._get_appointment(appointment_id)
        self._ensure_scheduled(appointment, "Only scheduled appointments can be marked as completed.")

        appointment.status = AppointmentStatus.COMPLETED
        self.uow.appointments.update(appointment)
        self.uow.commit()

        logger.info(f"Appointment {appointment.id} completed" + (f": {notes}" if notes else ""))
        return appointment
