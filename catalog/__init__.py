"""Catalog package"""
from .default_catalog import (
    build_default_catalog, build_sessions, validate_catalog, without_faculty
)

__all__ = ['build_default_catalog', 'build_sessions', 'validate_catalog', 'without_faculty']
