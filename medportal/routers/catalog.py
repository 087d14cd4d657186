from typing import List

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from starlette import status

from medportal.core.auth import require_permission
from medportal.core.db import get_db
from medportal.models.schemas.directory import (
    BrandCreateModel,
    BrandResponseModel,
    BrandUpdateModel,
    ClinicCreateModel,
    ClinicResponseModel,
    ClinicUpdateModel,
    ProductCreateModel,
    ProductResponseModel,
    ProductUpdateModel,
)
from medportal.services.directory_service import DirectoryService
from medportal.services.permissions import Permission

router = APIRouter(tags=["catalog"])


# --- Brands ---


@router.get(
    "/brands",
    response_model=List[BrandResponseModel],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.VIEW_BRANDS, "view brands"))],
)
def list_brands(db: Session = Depends(get_db)):
    return DirectoryService(db).list_brands()


@router.post(
    "/brands",
    response_model=BrandResponseModel,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.CREATE_BRAND, "create brands"))],
)
def create_brand(data: BrandCreateModel, db: Session = Depends(get_db)):
    return DirectoryService(db).create_brand(data)


@router.get(
    "/brands/{brand_id}",
    response_model=BrandResponseModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.VIEW_BRANDS, "view brands"))],
)
def get_brand(brand_id: str = Path(...), db: Session = Depends(get_db)):
    return DirectoryService(db).get_brand(brand_id)


@router.patch(
    "/brands/{brand_id}",
    response_model=BrandResponseModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.EDIT_BRAND, "edit brands"))],
)
def update_brand(data: BrandUpdateModel, brand_id: str = Path(...), db: Session = Depends(get_db)):
    return DirectoryService(db).update_brand(brand_id, data)


@router.delete(
    "/brands/{brand_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a brand (refused while it still has products)",
    dependencies=[Depends(require_permission(Permission.DELETE_BRAND, "delete brands"))],
)
def delete_brand(brand_id: str = Path(...), db: Session = Depends(get_db)):
    DirectoryService(db).delete_brand(brand_id)


# --- Products ---


@router.get(
    "/products",
    response_model=List[ProductResponseModel],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.VIEW_PRODUCTS, "view products"))],
)
def list_products(
    brand_id: str | None = Query(None),
    representative_id: str | None = Query(
        None, description="Products of the brands assigned to this representative."
    ),
    db: Session = Depends(get_db),
):
    return DirectoryService(db).list_products(brand_id=brand_id, representative_id=representative_id)


@router.post(
    "/products",
    response_model=ProductResponseModel,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.CREATE_PRODUCT, "create products"))],
)
def create_product(data: ProductCreateModel, db: Session = Depends(get_db)):
    return DirectoryService(db).create_product(data)


@router.get(
    "/products/{product_id}",
    response_model=ProductResponseModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.VIEW_PRODUCTS, "view products"))],
)
def get_product(product_id: str = Path(...), db: Session = Depends(get_db)):
    return DirectoryService(db).get_product(product_id)


@router.patch(
    "/products/{product_id}",
    response_model=ProductResponseModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.EDIT_PRODUCT, "edit products"))],
)
def update_product(
    data: ProductUpdateModel, product_id: str = Path(...), db: Session = Depends(get_db)
):
    return DirectoryService(db).update_product(product_id, data)


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Permission.DELETE_PRODUCT, "delete products"))],
)
def delete_product(product_id: str = Path(...), db: Session = Depends(get_db)):
    DirectoryService(db).delete_product(product_id)


# --- Clinics ---


@router.get(
    "/clinics",
    response_model=List[ClinicResponseModel],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.VIEW_CLINICS, "view clinics"))],
)
def list_clinics(db: Session = Depends(get_db)):
    return DirectoryService(db).list_clinics()


@router.post(
    "/clinics",
    response_model=ClinicResponseModel,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.CREATE_CLINIC, "create clinics"))],
)
def create_clinic(data: ClinicCreateModel, db: Session = Depends(get_db)):
    return DirectoryService(db).create_clinic(data)


@router.get(
    "/clinics/{clinic_id}",
    response_model=ClinicResponseModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.VIEW_CLINICS, "view clinics"))],
)
def get_clinic(clinic_id: str = Path(...), db: Session = Depends(get_db)):
    return DirectoryService(db).get_clinic(clinic_id)


@router.patch(
    "/clinics/{clinic_id}",
    response_model=ClinicResponseModel,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_permission(Permission.EDIT_CLINIC, "edit clinics"))],
)
def update_clinic(
    data: ClinicUpdateModel, clinic_id: str = Path(...), db: Session = Depends(get_db)
):
    return DirectoryService(db).update_clinic(clinic_id, data)


@router.delete(
    "/clinics/{clinic_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(Permission.DELETE_CLINIC, "delete clinics"))],
)
def delete_clinic(clinic_id: str = Path(...), db: Session = Depends(get_db)):
    DirectoryService(db).delete_clinic(clinic_id)
