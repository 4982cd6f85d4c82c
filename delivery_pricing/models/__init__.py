from delivery_pricing.models.product import PricedProduct, Product

__all__ = ["Product", "PricedProduct"]
