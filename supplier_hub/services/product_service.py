from sqlalchemy.orm import Session
from supplier_hub.models.product import Product
from typing import List, Optional


class ProductService:
    def __init__(self, db: Session, supplier_id: int):
        self.db = db
        self.supplier_id = supplier_id

    def get_products(self, available_only: bool = False) -> List[Product]:
        """
        Supplier catalog ordered by category, then name
        """
        query = self.db.query(Product).filter(Product.supplier_id == self.supplier_id)

        if available_only:
            query = query.filter(Product.is_available == True)

        return query.order_by(Product.category, Product.name).all()

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.db.query(Product).filter(
            Product.id == product_id,
            Product.supplier_id == self.supplier_id
        ).first()

    def create_product(self, product_data: dict) -> Product:
        product = Product(
            supplier_id=self.supplier_id,
            **product_data
        )
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product_id: str, product_data: dict) -> Product:
        """Partial update; unknown keys are ignored"""
        product = self.get_product(product_id)
        if not product:
            raise ValueError(f"Product {product_id} not found")

        for key, value in product_data.items():
            if hasattr(product, key):
                setattr(product, key, value)

        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product_id: str) -> bool:
        product = self.get_product(product_id)
        if not product:
            raise ValueError(f"Product {product_id} not found")

        self.db.delete(product)
        self.db.commit()
        return True
