from sqlalchemy import Column, DateTime, ForeignKey, String, Table
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow

representative_clinics = Table(
    "representative_clinics",
    Base.metadata,
    Column(
        "representative_id",
        String,
        ForeignKey("representatives.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("clinic_id", String, ForeignKey("clinics.id", ondelete="CASCADE"), primary_key=True),
)

representative_brands = Table(
    "representative_brands",
    Base.metadata,
    Column(
        "representative_id",
        String,
        ForeignKey("representatives.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("brand_id", String, ForeignKey("brands.id", ondelete="CASCADE"), primary_key=True),
)


class RepresentativeORM(Base):
    __tablename__ = "representatives"

    id = Column(String, primary_key=True, default=new_id)
    user_id = Column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    manager_id = Column(
        String, ForeignKey("managers.id", ondelete="SET NULL"), nullable=True, index=True
    )
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    full_name = Column(String, nullable=False, index=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("UserORM")
    manager = relationship("ManagerORM", back_populates="representatives")
    clinics = relationship("ClinicORM", secondary=representative_clinics, order_by="ClinicORM.name")
    brands = relationship("BrandORM", secondary=representative_brands, order_by="BrandORM.name")
