"""
Product catalog models

Only what the shipping estimation reads: the product code and typed
properties such as `package-weight` (kilograms per unit).
"""
from sqlalchemy import Column, Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship

from shipcost.core.database import Base

PACKAGE_WEIGHT_PROPERTY = "package-weight"


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(64), unique=True, index=True, nullable=False)
    label = Column(String(255), nullable=False, default="")

    properties = relationship(
        "ProductProperty",
        back_populates="product",
        cascade="all, delete-orphan",
    )

    def get_properties(self, property_type: str):
        """Values of all properties with the given type."""
        return [prop.value for prop in self.properties if prop.type == property_type]


class ProductProperty(Base):
    __tablename__ = "product_properties"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(64), nullable=False)
    value = Column(String(255), nullable=False)

    product = relationship("Product", back_populates="properties")

    __table_args__ = (
        Index("ix_product_properties_product_type", "product_id", "type"),
    )
