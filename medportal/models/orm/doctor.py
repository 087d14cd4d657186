from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow

clinic_doctors = Table(
    "clinic_doctors",
    Base.metadata,
    Column("clinic_id", String, ForeignKey("clinics.id", ondelete="CASCADE"), primary_key=True),
    Column("doctor_id", String, ForeignKey("doctors.id", ondelete="CASCADE"), primary_key=True),
)


class SpecializationORM(Base):
    __tablename__ = "specializations"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False, unique=True)
    display_name = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)


class DoctorORM(Base):
    __tablename__ = "doctors"

    id = Column(String, primary_key=True, default=new_id)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    specialization_id = Column(
        String, ForeignKey("specializations.id", ondelete="SET NULL"), nullable=True, index=True
    )
    # Free-text specialty kept for doctors imported before specializations existed
    specialty = Column(String, nullable=True)
    total_category = Column(String, nullable=True)
    planeta_category = Column(String, nullable=True)
    gender = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    specialization = relationship("SpecializationORM")
    clinics = relationship(
        "ClinicORM", secondary=clinic_doctors, back_populates="doctors", order_by="ClinicORM.name"
    )
