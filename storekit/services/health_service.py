"""Health service - patients and their prescriptions."""

from datetime import date, timedelta
from typing import List, Optional

from storekit.models.domain import Patient, Prescription
from storekit.repositories.derived_index import DerivedIndex, build_index
from storekit.repositories.entity_store import EntityStore
from storekit.services.reporting import ReportSink


class HealthService:
    """
    Service for patient and prescription lookups.

    Prescriptions are grouped by ``patient_id`` into a DerivedIndex. The
    index is only as fresh as the last ``build_prescription_map`` call;
    prescriptions added afterwards are not visible until it is rebuilt.
    """

    def __init__(self, sink: Optional[ReportSink] = None, today: Optional[date] = None):
        self.sink = sink or ReportSink()
        self.today = today or date.today()
        self.patients: EntityStore[Patient] = EntityStore(Patient)
        self.prescriptions: EntityStore[Prescription] = EntityStore(Prescription)
        self._prescription_map: DerivedIndex[int, Prescription] = build_index(
            self.prescriptions, lambda rx: rx.patient_id
        )

    def seed_data(self) -> None:
        """Add sample patients and prescriptions (all referencing existing patients)."""
        self.patients.add(Patient(1, "Ama Mensah", 28, "Female"))
        self.patients.add(Patient(2, "Kwame Boateng", 35, "Male"))
        self.patients.add(Patient(3, "Akosua Owusu", 42, "Female"))

        self.prescriptions.add(Prescription(101, 1, "Amoxicillin 500mg", self.today - timedelta(days=7)))
        self.prescriptions.add(Prescription(102, 1, "Ibuprofen 200mg", self.today - timedelta(days=2)))
        self.prescriptions.add(Prescription(103, 2, "Loratadine 10mg", self.today))
        self.prescriptions.add(Prescription(104, 3, "Vitamin D3 1000IU", self.today - timedelta(days=14)))
        self.prescriptions.add(Prescription(105, 2, "Paracetamol 500mg", self.today - timedelta(days=1)))

    def build_prescription_map(self) -> DerivedIndex[int, Prescription]:
        """Rebuild the patient -> prescriptions index from the current store."""
        self._prescription_map = build_index(self.prescriptions, lambda rx: rx.patient_id)
        return self._prescription_map

    def get_prescriptions_by_patient_id(self, patient_id: int) -> List[Prescription]:
        return self._prescription_map.lookup(patient_id)

    def print_all_patients(self) -> None:
        self.sink.heading("Patients")
        for p in self.patients.list():
            self.sink.info(f"Patient {{ Id={p.id}, Name={p.name}, Age={p.age}, Gender={p.gender} }}")

    def print_prescriptions_for_patient(self, patient_id: int) -> None:
        self.sink.info()
        self.sink.heading(f"Prescriptions for PatientId={patient_id}")
        prescriptions = self.get_prescriptions_by_patient_id(patient_id)
        if not prescriptions:
            self.sink.info("No prescriptions found.")
            return
        for rx in prescriptions:
            self.sink.info(
                f"Prescription {{ Id={rx.id}, PatientId={rx.patient_id}, "
                f"Medication={rx.medication_name}, Date={rx.date_issued.isoformat()} }}"
            )

    def run(self, patient_id: int = 2) -> None:
        """Run the fixed demonstration sequence."""
        self.sink.run_step("seed_data", self.seed_data)
        self.sink.run_step("build_prescription_map", self.build_prescription_map)
        self.print_all_patients()
        self.print_prescriptions_for_patient(patient_id)
