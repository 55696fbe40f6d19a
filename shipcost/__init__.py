"""
Shipping cost estimation for shop baskets via the Logsta API.
"""
__version__ = "1.0.0"
