from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .user import UserModel


# --- Clinics ---


class ClinicCreateModel(BaseModel):
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None


class ClinicUpdateModel(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None


class ClinicSummaryModel(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class ClinicResponseModel(ClinicSummaryModel):
    address: str
    phone: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime


# --- Brands and products ---


class BrandCreateModel(BaseModel):
    name: str = Field(..., min_length=1)


class BrandUpdateModel(BaseModel):
    name: Optional[str] = Field(None, min_length=1)


class BrandResponseModel(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class ProductCreateModel(BaseModel):
    brand_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    priority_specializations: List[str] = Field(
        default_factory=list,
        description="Specialization names this product should be pitched to first.",
    )
    annotations: Optional[str] = None


class ProductUpdateModel(BaseModel):
    brand_id: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    priority_specializations: Optional[List[str]] = None
    annotations: Optional[str] = None


class ProductResponseModel(BaseModel):
    id: str
    name: str
    brand_id: str
    brand: Optional[BrandResponseModel] = None
    description: Optional[str] = None
    priority_specializations: List[str] = Field(default_factory=list)
    annotations: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# --- Doctors ---


class SpecializationCreateModel(BaseModel):
    name: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)
    description: Optional[str] = None


class SpecializationUpdateModel(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    display_name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class SpecializationResponseModel(BaseModel):
    id: str
    name: str
    display_name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class DoctorCreateModel(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    specialization_id: Optional[str] = None
    specialty: Optional[str] = None
    total_category: Optional[str] = None
    planeta_category: Optional[str] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    clinic_ids: List[str] = Field(default_factory=list)


class DoctorUpdateModel(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    specialization_id: Optional[str] = None
    specialty: Optional[str] = None
    total_category: Optional[str] = None
    planeta_category: Optional[str] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    clinic_ids: Optional[List[str]] = None


class DoctorResponseModel(BaseModel):
    id: str
    first_name: str
    last_name: str
    specialization_id: Optional[str] = None
    specialization: Optional[SpecializationResponseModel] = None
    specialty: Optional[str] = None
    total_category: Optional[str] = None
    planeta_category: Optional[str] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    clinics: List[ClinicSummaryModel] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


# --- Representatives ---


class RepresentativeCreateModel(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    manager_id: Optional[str] = Field(
        None, description="Defaults to the creating manager's own profile."
    )
    email: Optional[str] = Field(
        None, description="When given together with a password, a login account is created."
    )
    password: Optional[str] = Field(None, min_length=6, max_length=72)
    clinic_ids: List[str] = Field(default_factory=list)
    brand_ids: List[str] = Field(default_factory=list)


class RepresentativeUpdateModel(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    manager_id: Optional[str] = None
    clinic_ids: Optional[List[str]] = None
    brand_ids: Optional[List[str]] = None


class RepresentativeResponseModel(BaseModel):
    id: str
    first_name: str
    last_name: str
    full_name: str
    manager_id: Optional[str] = None
    user: Optional[UserModel] = Field(
        None, description="Linked login account; null when none is linked or it is missing."
    )
    clinics: List[ClinicSummaryModel] = Field(default_factory=list)
    brands: List[BrandResponseModel] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
