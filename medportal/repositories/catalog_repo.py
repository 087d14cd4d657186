from typing import List

from sqlalchemy import select

from medportal.models.orm.clinic import ClinicORM
from medportal.models.orm.product import BrandORM, ProductORM
from medportal.models.orm.representative import representative_brands

from .base_repo import RecordRepository


class ClinicRepository(RecordRepository[ClinicORM]):
    model = ClinicORM
    label = "clinic"
    order_by = (ClinicORM.name,)


class BrandRepository(RecordRepository[BrandORM]):
    model = BrandORM
    label = "brand"
    order_by = (BrandORM.name,)


class ProductRepository(RecordRepository[ProductORM]):
    model = ProductORM
    label = "product"
    order_by = (ProductORM.name,)

    def list_by_brand(self, brand_id: str) -> List[ProductORM]:
        return self.filter_by(brand_id=brand_id)

    def list_for_representative(self, representative_id: str) -> List[ProductORM]:
        """Products of every brand the representative carries."""
        stmt = (
            select(ProductORM)
            .join(representative_brands, representative_brands.c.brand_id == ProductORM.brand_id)
            .where(representative_brands.c.representative_id == representative_id)
            .order_by(*self._ordering())
        )
        return self._scalars(stmt)
