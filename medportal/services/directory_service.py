import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from medportal.core.errors import PermissionDenied, RecordConflict, RecordNotFound
from medportal.models.orm.representative import RepresentativeORM
from medportal.models.orm.user import UserRole
from medportal.models.schemas.directory import (
    BrandCreateModel,
    BrandResponseModel,
    BrandUpdateModel,
    ClinicCreateModel,
    ClinicResponseModel,
    ClinicUpdateModel,
    DoctorCreateModel,
    DoctorResponseModel,
    DoctorUpdateModel,
    ProductCreateModel,
    ProductResponseModel,
    ProductUpdateModel,
    RepresentativeCreateModel,
    RepresentativeResponseModel,
    RepresentativeUpdateModel,
    SpecializationCreateModel,
    SpecializationResponseModel,
    SpecializationUpdateModel,
)
from medportal.models.schemas.user import (
    ManagerCreateModel,
    ManagerResponseModel,
    ManagerUpdateModel,
    SessionModel,
)
from medportal.repositories.base_repo import parse_record, parse_records
from medportal.repositories.catalog_repo import (
    BrandRepository,
    ClinicRepository,
    ProductRepository,
)
from medportal.repositories.doctor_repo import DoctorRepository, SpecializationRepository
from medportal.repositories.representative_repo import RepresentativeRepository
from medportal.repositories.user_repo import ManagerRepository
from medportal.services.auth_service import AuthService

logger = logging.getLogger(__name__)


def clean_ids(ids: Iterable[Optional[str]]) -> Tuple[str, ...]:
    """Trimmed, non-blank ids with repeats dropped, first occurrence wins."""
    cleaned = (i.strip() for i in ids if i is not None)
    return tuple(dict.fromkeys(i for i in cleaned if i))


def manages(session: SessionModel, rep: RepresentativeORM) -> bool:
    """Whether the session may act on the representative. Managers only reach their own team."""
    if session.role != UserRole.MANAGER:
        return True
    return session.manager_id is not None and rep.manager_id == session.manager_id


class DirectoryService:
    """
    Reference data: representatives, doctors, specializations, clinics,
    brands, products and managers. Everything returned is a typed record.
    """

    def __init__(self, db: Session):
        self.representative_repo = RepresentativeRepository(db)
        self.doctor_repo = DoctorRepository(db)
        self.specialization_repo = SpecializationRepository(db)
        self.clinic_repo = ClinicRepository(db)
        self.brand_repo = BrandRepository(db)
        self.product_repo = ProductRepository(db)
        self.manager_repo = ManagerRepository(db)
        self.auth_service = AuthService(db)

    # --- Representatives ---

    def list_representatives(
        self,
        session: SessionModel,
        manager_id: Optional[str] = None,
        query: Optional[str] = None,
    ) -> List[RepresentativeResponseModel]:
        """
        Lists representatives, optionally narrowed to one team and/or a name
        search. A manager is always narrowed to their own team, whatever
        `manager_id` asks for.
        """
        if session.role == UserRole.MANAGER:
            if session.manager_id is None:
                return []
            manager_id = session.manager_id

        if query:
            reps = self.representative_repo.search(query, manager_id=manager_id)
        elif manager_id:
            reps = self.representative_repo.list_for_manager(manager_id)
        else:
            reps = self.representative_repo.list_all()
        return [self._representative_record(rep) for rep in reps]

    def get_representative(
        self, representative_id: str, session: Optional[SessionModel] = None
    ) -> RepresentativeResponseModel:
        if session is None:
            rep = self.representative_repo.require(representative_id)
        else:
            rep = self.require_team_member(representative_id, session)
        return self._representative_record(rep)

    def require_team_member(
        self, representative_id: str, session: SessionModel
    ) -> RepresentativeORM:
        """The representative, if the session may act on it. Other teams read as missing."""
        rep = self.representative_repo.require(representative_id)
        if not manages(session, rep):
            raise RecordNotFound(self.representative_repo.label, representative_id)
        return rep

    def create_representative(
        self, data: RepresentativeCreateModel, session: SessionModel
    ) -> RepresentativeResponseModel:
        manager_id = data.manager_id
        if session.role == UserRole.MANAGER:
            # Managers can only staff their own team
            if manager_id and manager_id != session.manager_id:
                raise PermissionDenied("Managers can only create representatives for themselves.")
            manager_id = session.manager_id
        if manager_id:
            self.manager_repo.require(manager_id)

        clinics = self.clinic_repo.require_all(clean_ids(data.clinic_ids))
        brands = self.brand_repo.require_all(clean_ids(data.brand_ids))

        user = None
        if data.email and data.password:
            user = self.auth_service.register_user(data.email, data.password, UserRole.REP)

        rep = self.representative_repo.create_representative(
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            manager_id=manager_id,
            clinics=clinics,
            brands=brands,
            user=user,
        )
        logger.info("Created representative %s (%s)", rep.id, rep.full_name)
        return self._representative_record(rep)

    def update_representative(
        self, representative_id: str, data: RepresentativeUpdateModel, session: SessionModel
    ) -> RepresentativeResponseModel:
        rep = self.require_team_member(representative_id, session)
        changes = data.model_dump(exclude_unset=True, exclude={"clinic_ids", "brand_ids"})
        if (
            session.role == UserRole.MANAGER
            and "manager_id" in changes
            and changes["manager_id"] != session.manager_id
        ):
            raise PermissionDenied("Managers can only assign representatives to themselves.")
        if changes.get("manager_id"):
            self.manager_repo.require(changes["manager_id"])

        clinics = brands = None
        if data.clinic_ids is not None:
            clinics = self.clinic_repo.require_all(clean_ids(data.clinic_ids))
        if data.brand_ids is not None:
            brands = self.brand_repo.require_all(clean_ids(data.brand_ids))

        rep = self.representative_repo.update_representative(rep, changes, clinics, brands)
        return self._representative_record(rep)

    def delete_representative(self, representative_id: str, session: SessionModel) -> None:
        self.require_team_member(representative_id, session)
        self.representative_repo.delete(representative_id)
        logger.info("Deleted representative %s", representative_id)

    def _representative_record(self, rep: RepresentativeORM) -> RepresentativeResponseModel:
        record = parse_record(RepresentativeResponseModel, rep)
        if rep.user_id and record.user is None:
            logger.warning(
                "No user record found for representative %s (%s)", rep.full_name, rep.id
            )
        return record

    # --- Doctors ---

    def list_doctors(
        self, clinic_id: Optional[str] = None, specialization_id: Optional[str] = None
    ) -> List[DoctorResponseModel]:
        return parse_records(
            DoctorResponseModel,
            self.doctor_repo.list_doctors(clinic_id=clinic_id, specialization_id=specialization_id),
        )

    def search_doctors(self, query: str) -> List[DoctorResponseModel]:
        return parse_records(DoctorResponseModel, self.doctor_repo.search(query))

    def get_doctor(self, doctor_id: str) -> DoctorResponseModel:
        return parse_record(DoctorResponseModel, self.doctor_repo.require(doctor_id))

    def create_doctor(self, data: DoctorCreateModel) -> DoctorResponseModel:
        if data.specialization_id:
            self.specialization_repo.require(data.specialization_id)
        clinics = self.clinic_repo.require_all(clean_ids(data.clinic_ids))

        doctor = self.doctor_repo.create_doctor(data.model_dump(exclude={"clinic_ids"}), clinics)
        logger.info("Created doctor %s", doctor.id)
        return parse_record(DoctorResponseModel, doctor)

    def update_doctor(self, doctor_id: str, data: DoctorUpdateModel) -> DoctorResponseModel:
        doctor = self.doctor_repo.require(doctor_id)
        changes = data.model_dump(exclude_unset=True, exclude={"clinic_ids"})
        if changes.get("specialization_id"):
            self.specialization_repo.require(changes["specialization_id"])

        clinics = None
        if data.clinic_ids is not None:
            clinics = self.clinic_repo.require_all(clean_ids(data.clinic_ids))

        doctor = self.doctor_repo.update_doctor(doctor, changes, clinics)
        return parse_record(DoctorResponseModel, doctor)

    def delete_doctor(self, doctor_id: str) -> None:
        self.doctor_repo.delete(doctor_id)

    # --- Specializations ---

    def list_specializations(self) -> List[SpecializationResponseModel]:
        return parse_records(SpecializationResponseModel, self.specialization_repo.list_all())

    def get_specialization(self, specialization_id: str) -> SpecializationResponseModel:
        return parse_record(
            SpecializationResponseModel, self.specialization_repo.require(specialization_id)
        )

    def create_specialization(self, data: SpecializationCreateModel) -> SpecializationResponseModel:
        record = self.specialization_repo.insert(**data.model_dump())
        return parse_record(SpecializationResponseModel, record)

    def update_specialization(
        self, specialization_id: str, data: SpecializationUpdateModel
    ) -> SpecializationResponseModel:
        record = self.specialization_repo.update(
            specialization_id, **data.model_dump(exclude_unset=True)
        )
        return parse_record(SpecializationResponseModel, record)

    def delete_specialization(self, specialization_id: str) -> None:
        # Doctors keep their record; their specialization is cleared by the store
        self.specialization_repo.delete(specialization_id)
        logger.info("Deleted specialization %s", specialization_id)

    # --- Clinics ---

    def list_clinics(self) -> List[ClinicResponseModel]:
        return parse_records(ClinicResponseModel, self.clinic_repo.list_all())

    def get_clinic(self, clinic_id: str) -> ClinicResponseModel:
        return parse_record(ClinicResponseModel, self.clinic_repo.require(clinic_id))

    def create_clinic(self, data: ClinicCreateModel) -> ClinicResponseModel:
        return parse_record(ClinicResponseModel, self.clinic_repo.insert(**data.model_dump()))

    def update_clinic(self, clinic_id: str, data: ClinicUpdateModel) -> ClinicResponseModel:
        record = self.clinic_repo.update(clinic_id, **data.model_dump(exclude_unset=True))
        return parse_record(ClinicResponseModel, record)

    def delete_clinic(self, clinic_id: str) -> None:
        self.clinic_repo.delete(clinic_id)

    # --- Brands ---

    def list_brands(self) -> List[BrandResponseModel]:
        return parse_records(BrandResponseModel, self.brand_repo.list_all())

    def get_brand(self, brand_id: str) -> BrandResponseModel:
        return parse_record(BrandResponseModel, self.brand_repo.require(brand_id))

    def create_brand(self, data: BrandCreateModel) -> BrandResponseModel:
        return parse_record(BrandResponseModel, self.brand_repo.insert(name=data.name.strip()))

    def update_brand(self, brand_id: str, data: BrandUpdateModel) -> BrandResponseModel:
        record = self.brand_repo.update(brand_id, **data.model_dump(exclude_unset=True))
        return parse_record(BrandResponseModel, record)

    def delete_brand(self, brand_id: str) -> None:
        self.brand_repo.delete(brand_id)

    # --- Products ---

    def list_products(
        self, brand_id: Optional[str] = None, representative_id: Optional[str] = None
    ) -> List[ProductResponseModel]:
        if representative_id:
            products = self.product_repo.list_for_representative(representative_id)
        elif brand_id:
            products = self.product_repo.list_by_brand(brand_id)
        else:
            products = self.product_repo.list_all()
        return parse_records(ProductResponseModel, products)

    def get_product(self, product_id: str) -> ProductResponseModel:
        return parse_record(ProductResponseModel, self.product_repo.require(product_id))

    def create_product(self, data: ProductCreateModel) -> ProductResponseModel:
        self.brand_repo.require(data.brand_id)
        record = self.product_repo.insert(**data.model_dump())
        logger.info("Created product %s for brand %s", record.id, data.brand_id)
        return parse_record(ProductResponseModel, record)

    def update_product(self, product_id: str, data: ProductUpdateModel) -> ProductResponseModel:
        changes = data.model_dump(exclude_unset=True)
        if changes.get("brand_id"):
            self.brand_repo.require(changes["brand_id"])
        record = self.product_repo.update(product_id, **changes)
        return parse_record(ProductResponseModel, record)

    def delete_product(self, product_id: str) -> None:
        self.product_repo.delete(product_id)

    # --- Managers ---

    def list_managers(self) -> List[ManagerResponseModel]:
        return parse_records(ManagerResponseModel, self.manager_repo.list_all())

    def get_manager(self, manager_id: str) -> ManagerResponseModel:
        return parse_record(ManagerResponseModel, self.manager_repo.require(manager_id))

    def create_manager(self, data: ManagerCreateModel) -> ManagerResponseModel:
        user = self.auth_service.register_user(data.email, data.password, UserRole.MANAGER)
        manager = self.manager_repo.create_with_user(user, data.full_name.strip())
        logger.info("Created manager %s", manager.id)
        return parse_record(ManagerResponseModel, manager)

    def update_manager(self, manager_id: str, data: ManagerUpdateModel) -> ManagerResponseModel:
        """Renames the manager and/or moves their login to a new email address."""
        manager = self.manager_repo.require(manager_id)
        email = data.email.strip().lower() if data.email else None
        if email and manager.user is not None and email != manager.user.email:
            existing = self.auth_service.user_repo.get_by_email(email)
            if existing is not None:
                raise RecordConflict(f"A user with email {email} already exists.")

        manager = self.manager_repo.update_with_user(
            manager,
            full_name=data.full_name.strip() if data.full_name else None,
            email=email,
        )
        logger.info("Updated manager %s", manager.id)
        return parse_record(ManagerResponseModel, manager)

    def delete_manager(self, manager_id: str) -> None:
        self.manager_repo.delete_with_user(manager_id)
        logger.info("Deleted manager %s and its account", manager_id)
