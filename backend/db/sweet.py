from sqlalchemy import CheckConstraint, Column, DateTime, Float, Integer, String
from sqlalchemy.sql import func

from .database import Base


class Sweet(Base):
    """Catalog item. `quantity` is only ever changed through the inventory ledger or an admin edit."""
    __tablename__ = "sweets"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_sweets_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_sweets_price_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, index=True)
    category = Column(String(32), nullable=False, index=True)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, server_default=func.now(), index=True)
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    @property
    def to_schema(self):
        """Convert Sweet model to schema dictionary format"""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "quantity": self.quantity,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
