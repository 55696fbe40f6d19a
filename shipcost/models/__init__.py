from shipcost.models.product import Product, ProductProperty, PACKAGE_WEIGHT_PROPERTY

__all__ = ["Product", "ProductProperty", "PACKAGE_WEIGHT_PROPERTY"]
