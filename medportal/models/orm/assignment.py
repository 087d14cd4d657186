from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow

assignment_doctors = Table(
    "assignment_doctors",
    Base.metadata,
    Column(
        "assignment_id", String, ForeignKey("assignments.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("doctor_id", String, ForeignKey("doctors.id", ondelete="CASCADE"), primary_key=True),
)

assignment_products = Table(
    "assignment_products",
    Base.metadata,
    Column(
        "assignment_id", String, ForeignKey("assignments.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("product_id", String, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
)


class AssignmentORM(Base):
    """One materialized visit date of a recurring weekly series."""

    __tablename__ = "assignments"

    id = Column(String, primary_key=True, default=new_id)
    # All dates created by one form submission share a series id
    series_id = Column(String, nullable=False, index=True)
    representative_id = Column(
        String, ForeignKey("representatives.id"), nullable=False, index=True
    )
    weekday = Column(Integer, nullable=False)  # 0=Sunday .. 6=Saturday
    scheduled_date = Column(Date, nullable=False, index=True)
    note = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    representative = relationship("RepresentativeORM")
    doctors = relationship("DoctorORM", secondary=assignment_doctors, order_by="DoctorORM.last_name")
    products = relationship("ProductORM", secondary=assignment_products, order_by="ProductORM.name")

    @property
    def doctor_ids(self) -> list[str]:
        return [doctor.id for doctor in self.doctors]

    @property
    def product_ids(self) -> list[str]:
        return [product.id for product in self.products]
