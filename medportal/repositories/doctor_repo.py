from typing import List, Optional

from sqlalchemy import or_, select

from medportal.models.orm.clinic import ClinicORM
from medportal.models.orm.doctor import DoctorORM, SpecializationORM, clinic_doctors

from .base_repo import RecordRepository


class SpecializationRepository(RecordRepository[SpecializationORM]):
    model = SpecializationORM
    label = "specialization"
    order_by = (SpecializationORM.display_name,)


class DoctorRepository(RecordRepository[DoctorORM]):
    model = DoctorORM
    label = "doctor"
    order_by = (DoctorORM.last_name, DoctorORM.first_name)

    def list_doctors(
        self, clinic_id: Optional[str] = None, specialization_id: Optional[str] = None
    ) -> List[DoctorORM]:
        """Lists doctors, optionally narrowed to one clinic and/or specialization."""
        stmt = select(DoctorORM)

        if clinic_id:
            stmt = stmt.join(clinic_doctors, clinic_doctors.c.doctor_id == DoctorORM.id).where(
                clinic_doctors.c.clinic_id == clinic_id
            )

        if specialization_id:
            stmt = stmt.where(DoctorORM.specialization_id == specialization_id)

        return self._scalars(stmt.order_by(*self._ordering()))

    def search(self, query: str) -> List[DoctorORM]:
        pattern = f"%{query.strip()}%"
        stmt = (
            select(DoctorORM)
            .where(or_(DoctorORM.first_name.ilike(pattern), DoctorORM.last_name.ilike(pattern)))
            .order_by(*self._ordering())
        )
        return self._scalars(stmt)

    def create_doctor(self, values: dict, clinics: List[ClinicORM]) -> DoctorORM:
        doctor = DoctorORM(**values, clinics=clinics)
        self.db.add(doctor)
        self.commit()
        self.db.refresh(doctor)
        return doctor

    def update_doctor(
        self, doctor: DoctorORM, changes: dict, clinics: Optional[List[ClinicORM]] = None
    ) -> DoctorORM:
        for name, value in changes.items():
            setattr(doctor, name, value)
        if clinics is not None:
            doctor.clinics = clinics
        self.commit()
        self.db.refresh(doctor)
        return doctor
