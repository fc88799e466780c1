house = {
    "full_name": "Gregory House",
    "specialization": "Diagnostics",
    "email": "house@clinic.com",
    "phone": "555-0100",
}


class TestDoctorCrud:

    def test_create_and_get_doctor(self, client, admin_headers):
        response = client.post("/api/doctor", json=house, headers=admin_headers)
        assert response.status_code == 201
        created = response.json()
        assert response.headers["Location"] == f"/api/doctor/{created['id']}"

        response = client.get(f"/api/doctor/{created['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {**house, "id": created["id"]}

    def test_create_doctor_requires_full_name(self, client, admin_headers):
        response = client.post("/api/doctor", json={"specialization": "Cardiology"}, headers=admin_headers)
        assert response.status_code == 400

    def test_list_doctors(self, client, receptionist_headers, doctor):
        """Test that any signed-in user can browse doctors."""
        response = client.get("/api/doctor", headers=receptionist_headers)
        assert response.status_code == 200
        assert [d["id"] for d in response.json()] == [doctor["id"]]

    def test_update_doctor(self, client, admin_headers, doctor):
        update = {**house, "id": doctor["id"], "specialization": "Nephrology"}

        response = client.put(f"/api/doctor/{doctor['id']}", json=update, headers=admin_headers)
        assert response.status_code == 204

        data = client.get(f"/api/doctor/{doctor['id']}", headers=admin_headers).json()
        assert data["specialization"] == "Nephrology"

    def test_update_doctor_id_mismatch(self, client, admin_headers, doctor):
        update = {**house, "id": doctor["id"] + 1}

        response = client.put(f"/api/doctor/{doctor['id']}", json=update, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Doctor ID mismatch."

    def test_update_missing_doctor(self, client, admin_headers):
        response = client.put("/api/doctor/999", json={**house, "id": 999}, headers=admin_headers)
        assert response.status_code == 404

    def test_delete_doctor(self, client, admin_headers, doctor):
        response = client.delete(f"/api/doctor/{doctor['id']}", headers=admin_headers)
        assert response.status_code == 204

        response = client.get(f"/api/doctor/{doctor['id']}", headers=admin_headers)
        assert response.status_code == 404

    def test_delete_missing_doctor(self, client, admin_headers):
        response = client.delete("/api/doctor/999", headers=admin_headers)
        assert response.status_code == 404


class TestDoctorAccess:

    def test_receptionist_cannot_create_doctor(self, client, receptionist_headers):
        response = client.post("/api/doctor", json=house, headers=receptionist_headers)
        assert response.status_code == 403

    def test_doctor_cannot_delete_doctor(self, client, doctor_headers, doctor):
        response = client.delete(f"/api/doctor/{doctor['id']}", headers=doctor_headers)
        assert response.status_code == 403


class TestDoctorReferences:

    def test_delete_doctor_with_appointment_conflicts(self, client, admin_headers, doctor, appointment):
        """Test that a doctor still booked for appointments cannot be removed."""
        response = client.delete(f"/api/doctor/{doctor['id']}", headers=admin_headers)
        assert response.status_code == 409

        response = client.get(f"/api/doctor/{doctor['id']}", headers=admin_headers)
        assert response.status_code == 200

        data = client.get("/api/appointment/all", headers=admin_headers).json()
        assert data[0]["doctor_name"] == doctor["full_name"]

    def test_delete_doctor_with_schedule_conflicts(self, client, admin_headers, doctor):
        client.post(
            "/api/doctorschedule",
            json={"doctor_id": doctor["id"], "day_of_week": "Monday", "start_time": "09:00", "end_time": "13:00"},
            headers=admin_headers,
        )

        response = client.delete(f"/api/doctor/{doctor['id']}", headers=admin_headers)
        assert response.status_code == 409
