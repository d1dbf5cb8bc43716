"""Acesso ao campo de estado das entidades."""

from .property_accessor import PropertyAccessor

__all__ = ["PropertyAccessor"]
