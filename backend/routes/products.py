# backend/routes/products.py
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from models.product import Product
from repositories.product_repo import ProductRepository
from schemas.common import ApiResponse, ok
from schemas.product import ProductCreate, ProductOut, ProductUpdate
from utils.errors import BadRequest, NotFound, parse_id
from utils.tokenJWT import role_required

router = APIRouter(prefix="/api/products", tags=["Products"])


def _product_out(product: Product) -> dict:
    return ProductOut.model_validate(product).model_dump()


@router.get("", response_model=ApiResponse[List[ProductOut]])
def get_all_products(db: Session = Depends(get_db)):
    products = ProductRepository(db).list_products()
    return ok("Products retrieved successfully", [_product_out(p) for p in products])


@router.get("/{product_id}", response_model=ApiResponse[ProductOut])
def get_product_by_id(product_id: str, db: Session = Depends(get_db)):
    product = ProductRepository(db).find_product(parse_id(product_id, "product"))
    if product is None:
        raise NotFound("Product not found")
    return ok("Product retrieved successfully", _product_out(product))


# Catalog changes are reserved for admins
@router.post("", response_model=ApiResponse[ProductOut], status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(role_required("admin"))])
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    now = datetime.now(timezone.utc)
    product = ProductRepository(db).insert_product(
        Product(**payload.model_dump(), created_at=now, updated_at=now)
    )
    return ok("Product created successfully", _product_out(product))


@router.put("/{product_id}", response_model=ApiResponse[ProductOut],
            dependencies=[Depends(role_required("admin"))])
def update_product(product_id: str, payload: ProductUpdate, db: Session = Depends(get_db)):
    pid = parse_id(product_id, "product")
    fields = payload.model_dump(exclude_unset=True)
    if not fields:
        raise BadRequest("No update fields provided")
    fields["updated_at"] = datetime.now(timezone.utc)

    product = ProductRepository(db).update_product_fields(pid, fields)
    if product is None:
        raise NotFound("Product not found")
    return ok("Product updated successfully", _product_out(product))


@router.delete("/{product_id}", response_model=ApiResponse[str],
               dependencies=[Depends(role_required("admin"))])
def delete_product(product_id: str, db: Session = Depends(get_db)):
    if not ProductRepository(db).delete_product(parse_id(product_id, "product")):
        raise NotFound("Product not found")
    return ok("Product deleted successfully", "Product deleted")
