from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow


class ClinicORM(Base):
    __tablename__ = "clinics"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False, index=True)
    address = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    doctors = relationship("DoctorORM", secondary="clinic_doctors", back_populates="clinics")
