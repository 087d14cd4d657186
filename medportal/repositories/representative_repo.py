from typing import List, Optional

from sqlalchemy import or_, select

from medportal.models.orm.clinic import ClinicORM
from medportal.models.orm.product import BrandORM
from medportal.models.orm.representative import RepresentativeORM
from medportal.models.orm.user import UserORM

from .base_repo import RecordRepository


class RepresentativeRepository(RecordRepository[RepresentativeORM]):
    model = RepresentativeORM
    label = "representative"
    order_by = (RepresentativeORM.full_name,)

    def get_by_user_id(self, user_id: str) -> Optional[RepresentativeORM]:
        reps = self.filter_by(user_id=user_id)
        return reps[0] if reps else None

    def list_for_manager(self, manager_id: str) -> List[RepresentativeORM]:
        return self.filter_by(manager_id=manager_id)

    def search(self, query: str, manager_id: Optional[str] = None) -> List[RepresentativeORM]:
        """Name search, optionally within one manager's team."""
        pattern = f"%{query.strip()}%"
        stmt = select(RepresentativeORM).where(
            or_(
                RepresentativeORM.full_name.ilike(pattern),
                RepresentativeORM.first_name.ilike(pattern),
                RepresentativeORM.last_name.ilike(pattern),
            )
        )

        if manager_id:
            stmt = stmt.where(RepresentativeORM.manager_id == manager_id)

        return self._scalars(stmt.order_by(*self._ordering()))

    def create_representative(
        self,
        first_name: str,
        last_name: str,
        manager_id: Optional[str],
        clinics: List[ClinicORM],
        brands: List[BrandORM],
        user: Optional[UserORM] = None,
    ) -> RepresentativeORM:
        """
        Creates the representative, its clinic/brand links and, when given,
        its staged login account in a single commit.
        """
        rep = RepresentativeORM(
            first_name=first_name,
            last_name=last_name,
            full_name=f"{first_name} {last_name}",
            manager_id=manager_id,
            user=user,
            clinics=clinics,
            brands=brands,
        )
        self.db.add(rep)
        self.commit()
        self.db.refresh(rep)
        return rep

    def update_representative(
        self,
        rep: RepresentativeORM,
        changes: dict,
        clinics: Optional[List[ClinicORM]] = None,
        brands: Optional[List[BrandORM]] = None,
    ) -> RepresentativeORM:
        for name, value in changes.items():
            setattr(rep, name, value)
        if "first_name" in changes or "last_name" in changes:
            rep.full_name = f"{rep.first_name} {rep.last_name}"
        if clinics is not None:
            rep.clinics = clinics
        if brands is not None:
            rep.brands = brands
        self.commit()
        self.db.refresh(rep)
        return rep
