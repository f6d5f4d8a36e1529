"""Catalog service core: entity lifecycle, products, course parts and images."""

__version__ = "0.1.0"
