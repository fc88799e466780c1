from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.appointment import Appointment


class AppointmentRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[Appointment]:
        return self.db.query(Appointment).order_by(Appointment.appointment_date).all()

    def get_by_id(self, appointment_id: int) -> Optional[Appointment]:
        return self.db.query(Appointment).filter(Appointment.id == appointment_id).first()

    def list_by_doctor_id(self, doctor_id: int) -> List[Appointment]:
        return (
            self.db.query(Appointment)
            .filter(Appointment.doctor_id == doctor_id)
            .order_by(Appointment.appointment_date)
            .all()
        )

    def add(self, appointment: Appointment) -> Appointment:
        self.db.add(appointment)
        return appointment

    def update(self, appointment: Appointment) -> Appointment:
        self.db.add(appointment)
        return appointment

    def delete(self, appointment: Appointment) -> None:
        self.db.delete(appointment)
