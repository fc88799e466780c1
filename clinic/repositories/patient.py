from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..models.patient import Patient


class PatientRepository:
    """Patients, with soft-deleted rows hidden from every read."""

    def __init__(self, db: Session):
        self.db = db

    def _active(self):
        return self.db.query(Patient).filter(Patient.is_deleted == False)  # noqa: E712

    def list_all(self) -> List[Patient]:
        return self._active().order_by(Patient.id).all()

    def get_by_id(self, patient_id: int) -> Optional[Patient]:
        return self._active().filter(Patient.id == patient_id).first()

    def exists(self, patient_id: int) -> bool:
        return self._active().filter(Patient.id == patient_id).first() is not None

    def get_names(self, patient_ids: Iterable[int]) -> Dict[int, str]:
        """Map ids to display names, soft-deleted patients included."""
        ids = set(patient_ids)
        if not ids:
            return {}
        rows = (
            self.db.query(Patient.id, Patient.first_name, Patient.last_name)
            .filter(Patient.id.in_(ids))
            .all()
        )
        return {row.id: f"{row.first_name} {row.last_name}" for row in rows}

    def add(self, patient: Patient) -> Patient:
        patient.created_at = datetime.utcnow()
        patient.is_deleted = False
        self.db.add(patient)
        return patient

    def update(self, patient: Patient) -> Patient:
        self.db.add(patient)
        return patient

    def soft_delete(self, patient: Patient) -> Patient:
        patient.is_deleted = True
        self.db.add(patient)
        return patient
