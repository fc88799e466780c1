from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..models.doctor import Doctor


class DoctorRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[Doctor]:
        return self.db.query(Doctor).order_by(Doctor.id).all()

    def get_by_id(self, doctor_id: int) -> Optional[Doctor]:
        return self.db.query(Doctor).filter(Doctor.id == doctor_id).first()

    def exists(self, doctor_id: int) -> bool:
        return self.db.query(Doctor.id).filter(Doctor.id == doctor_id).first() is not None

    def get_names(self, doctor_ids: Iterable[int]) -> Dict[int, str]:
        ids = set(doctor_ids)
        if not ids:
            return {}
        rows = self.db.query(Doctor.id, Doctor.full_name).filter(Doctor.id.in_(ids)).all()
        return {row.id: row.full_name for row in rows}

    def add(self, doctor: Doctor) -> Doctor:
        self.db.add(doctor)
        return doctor

    def update(self, doctor: Doctor) -> Doctor:
        self.db.add(doctor)
        return doctor

    def delete(self, doctor: Doctor) -> None:
        self.db.delete(doctor)
