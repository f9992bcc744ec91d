"""Catalog loading: decoded chain layout document to CatalogModel."""

from .loader import load_catalog, load_catalog_file

__all__ = ["load_catalog", "load_catalog_file"]
