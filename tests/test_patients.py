import json
import os

from clinic.core.config import settings
from clinic.core.logging import AUDIT_LOG_FILES, LOG_TYPE_DELETION
from clinic.models.patient import Patient

jane = {"first_name": "Jane", "last_name": "Doe", "date_of_birth": "1990-01-01"}


class TestPatientCrud:

    def test_create_and_get_patient(self, client, receptionist_headers):
        """Test that a created patient reads back unchanged."""
        response = client.post("/api/patient", json=jane, headers=receptionist_headers)
        assert response.status_code == 201
        created = response.json()
        assert response.headers["Location"] == f"/api/patient/{created['id']}"

        response = client.get(f"/api/patient/{created['id']}", headers=receptionist_headers)
        assert response.status_code == 200

        data = response.json()
        assert data["first_name"] == "Jane"
        assert data["last_name"] == "Doe"
        assert data["date_of_birth"] == "1990-01-01"
        assert data["is_deleted"] is False
        assert data["created_at"]

    def test_create_patient_missing_fields(self, client, receptionist_headers):
        """Test that required fields are enforced."""
        response = client.post("/api/patient", json={"first_name": "Jane"}, headers=receptionist_headers)
        assert response.status_code == 400

        fields = {error["loc"][-1] for error in response.json()["detail"]}
        assert {"last_name", "date_of_birth"} <= fields

    def test_create_patient_invalid_email(self, client, receptionist_headers):
        response = client.post(
            "/api/patient", json={**jane, "email": "not-an-email"}, headers=receptionist_headers
        )
        assert response.status_code == 400

    def test_list_patients(self, client, receptionist_headers, patient):
        response = client.get("/api/patient", headers=receptionist_headers)
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [patient["id"]]

    def test_update_patient(self, client, receptionist_headers, patient):
        """Test that update replaces the mutable fields."""
        update = {
            "first_name": "Janet",
            "last_name": "Doe",
            "email": "janet@clinic.com",
            "phone_number": "555-0199",
            "date_of_birth": "1991-02-03",
        }
        response = client.put(f"/api/patient/{patient['id']}", json=update, headers=receptionist_headers)
        assert response.status_code == 204

        data = client.get(f"/api/patient/{patient['id']}", headers=receptionist_headers).json()
        for key, value in update.items():
            assert data[key] == value

    def test_update_missing_patient(self, client, receptionist_headers):
        response = client.put("/api/patient/999", json=jane, headers=receptionist_headers)
        assert response.status_code == 404

    def test_get_missing_patient(self, client, receptionist_headers):
        response = client.get("/api/patient/999", headers=receptionist_headers)
        assert response.status_code == 404


class TestPatientSoftDelete:

    def test_soft_delete_hides_patient(self, client, admin_headers, receptionist_headers, patient, db_session):
        """Test that a deleted patient disappears from reads but stays stored."""
        response = client.delete(f"/api/patient/{patient['id']}", headers=admin_headers)
        assert response.status_code == 204

        response = client.get(f"/api/patient/{patient['id']}", headers=receptionist_headers)
        assert response.status_code == 404

        response = client.get("/api/patient", headers=receptionist_headers)
        assert response.json() == []

        stored = db_session.query(Patient).filter(Patient.id == patient["id"]).first()
        assert stored is not None
        assert stored.is_deleted is True

    def test_delete_twice_is_not_found(self, client, admin_headers, patient):
        client.delete(f"/api/patient/{patient['id']}", headers=admin_headers)

        response = client.delete(f"/api/patient/{patient['id']}", headers=admin_headers)
        assert response.status_code == 404

    def test_soft_delete_is_audited(self, client, admin_headers, patient):
        """Test that soft deletes land in the deletion audit log."""
        log_path = os.path.join(settings.LOG_DIR, AUDIT_LOG_FILES[LOG_TYPE_DELETION])
        with open(log_path, encoding="utf-8") as log_file:
            seen = len(log_file.readlines())

        client.delete(f"/api/patient/{patient['id']}", headers=admin_headers)

        with open(log_path, encoding="utf-8") as log_file:
            entries = [json.loads(line) for line in log_file.readlines()[seen:] if line.strip()]

        assert len(entries) == 1
        assert any(
            entry["log_type"] == LOG_TYPE_DELETION and entry["patient_id"] == patient["id"]
            for entry in entries
        )

    def test_deleted_patient_cannot_book(self, client, admin_headers, receptionist_headers, patient, doctor):
        client.delete(f"/api/patient/{patient['id']}", headers=admin_headers)

        response = client.post(
            "/api/appointment",
            json={
                "patient_id": patient["id"],
                "doctor_id": doctor["id"],
                "appointment_date": "2030-05-01T09:30:00",
            },
            headers=receptionist_headers,
        )
        assert response.status_code == 400


class TestPatientAccess:

    def test_doctor_can_read_patients(self, client, doctor_headers, patient):
        response = client.get(f"/api/patient/{patient['id']}", headers=doctor_headers)
        assert response.status_code == 200

    def test_doctor_cannot_create_patient(self, client, doctor_headers):
        response = client.post("/api/patient", json=jane, headers=doctor_headers)
        assert response.status_code == 403

    def test_receptionist_cannot_delete_patient(self, client, receptionist_headers, patient):
        response = client.delete(f"/api/patient/{patient['id']}", headers=receptionist_headers)
        assert response.status_code == 403

    def test_anonymous_is_rejected(self, client):
        response = client.get("/api/patient")
        assert response.status_code == 401
