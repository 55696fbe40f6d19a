"""
Basket quantity aggregation and cost cache signatures.
"""
import hashlib
import json
from typing import Dict, Mapping

from shipcost.modules.shipping.base import Order


def get_quantities(order: Order) -> Dict[str, float]:
    """
    Aggregate product quantities of a basket by product code.

    Bundled products are counted under their own code, one level deep.

    Returns:
        Dict of product code -> summed quantity
    """
    quantities: Dict[str, float] = {}

    # basket can contain a product several times in different line items
    for order_product in order.products:
        code = order_product.product_code
        quantities[code] = quantities.get(code, 0) + order_product.quantity

        for bundled in order_product.products:
            code = bundled.product_code
            quantities[code] = quantities.get(code, 0) + bundled.quantity

    return quantities


def quantities_signature(quantities: Mapping[str, float]) -> str:
    """
    MD5 digest of code -> quantity pairs.

    Codes are sorted and quantities normalized to float, so maps with the
    same content produce the same signature regardless of insertion order.
    """
    normalized = {code: float(quantity) for code, quantity in quantities.items()}
    key_string = json.dumps(normalized, sort_keys=True, separators=(",", ":"))
    return hashlib.md5(key_string.encode()).hexdigest()
