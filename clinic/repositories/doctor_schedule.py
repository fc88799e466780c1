from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.doctor_schedule import DoctorSchedule


class DoctorScheduleRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[DoctorSchedule]:
        return self.db.query(DoctorSchedule).order_by(DoctorSchedule.id).all()

    def get_by_id(self, schedule_id: int) -> Optional[DoctorSchedule]:
        return self.db.query(DoctorSchedule).filter(DoctorSchedule.id == schedule_id).first()

    def list_by_doctor_id(self, doctor_id: int) -> List[DoctorSchedule]:
        return (
            self.db.query(DoctorSchedule)
            .filter(DoctorSchedule.doctor_id == doctor_id)
            .order_by(DoctorSchedule.id)
            .all()
        )

    def add(self, schedule: DoctorSchedule) -> DoctorSchedule:
        self.db.add(schedule)
        return schedule

    def update(self, schedule: DoctorSchedule) -> DoctorSchedule:
        self.db.add(schedule)
        return schedule

    def remove(self, schedule: DoctorSchedule) -> None:
        self.db.delete(schedule)
