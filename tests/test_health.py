from __future__ import annotations

from datetime import date

import pytest

from inventory_system import DuplicateRecordError, HealthRecordsService, Patient, Prescription


@pytest.fixture
def health() -> HealthRecordsService:
    service = HealthRecordsService()
    service.patients.add(Patient(id=1, name="Alice Johnson", age=34, gender="Female"))
    service.patients.add(Patient(id=2, name="Bob Smith", age=52, gender="Male"))
    service.prescriptions.add(Prescription(101, 1, "Amoxicillin", date(2024, 3, 1)))
    service.prescriptions.add(Prescription(103, 2, "Lisinopril", date(2024, 3, 3)))
    service.prescriptions.add(Prescription(102, 1, "Ibuprofen", date(2024, 3, 6)))
    return service


def test_prescriptions_grouped_by_patient(health):
    grouped = health.build_prescription_map()

    assert sorted(grouped) == [1, 2]
    assert [p.id for p in health.prescriptions_for(1)] == [101, 102]
    assert [p.medication_name for p in health.prescriptions_for(2)] == ["Lisinopril"]


def test_patient_without_prescriptions(health):
    health.build_prescription_map()

    assert health.prescriptions_for(3) == []
    assert health.render_prescriptions(3) == ["No prescriptions found for this patient."]


def test_map_is_rebuilt_on_demand(health):
    health.build_prescription_map()
    health.prescriptions.add(Prescription(104, 2, "Atorvastatin", date(2024, 3, 9)))
    assert len(health.prescriptions_for(2)) == 1

    health.build_prescription_map()
    assert len(health.prescriptions_for(2)) == 2


def test_render_patients(health):
    assert health.render_patients()[0] == "Patient [Id=1, Name=Alice Johnson, Age=34, Gender=Female]"
    assert HealthRecordsService().render_patients() == ["No patients found."]


def test_duplicate_patient_rejected(health):
    with pytest.raises(DuplicateRecordError):
        health.patients.add(Patient(id=1, name="Someone Else", age=40, gender="Male"))
