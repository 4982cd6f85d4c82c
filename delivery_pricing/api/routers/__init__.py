from . import products

__all__ = ["products"]
