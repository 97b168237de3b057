from typing import List, Optional

from sqlalchemy.orm import Session

from models.product import Product
from utils.transactions import store_errors


class ProductRepository:
    """Catalog store: products by id, with their current price and discount."""

    def __init__(self, db: Session):
        self.db = db

    def find_product(self, product_id: int) -> Optional[Product]:
        with store_errors(self.db, "Error fetching product"):
            return self.db.query(Product).filter(Product.id == product_id).first()

    def list_products(self) -> List[Product]:
        with store_errors(self.db, "Error fetching products"):
            return self.db.query(Product).order_by(Product.id).all()

    def insert_product(self, product: Product) -> Product:
        with store_errors(self.db, "Error creating product"):
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        return product

    def update_product_fields(self, product_id: int, fields: dict) -> Optional[Product]:
        with store_errors(self.db, "Error updating product"):
            product = self.db.query(Product).filter(Product.id == product_id).first()
            if product is None:
                return None
            for key, value in fields.items():
                setattr(product, key, value)
            self.db.commit()
            self.db.refresh(product)
        return product

    def delete_product(self, product_id: int) -> bool:
        with store_errors(self.db, "Error deleting product"):
            deleted = self.db.query(Product).filter(Product.id == product_id).delete()
            self.db.commit()
        return deleted > 0
