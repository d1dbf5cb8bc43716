"""Protocolos dos colaboradores externos do motor."""

from .callback_resolver import CallbackHandler, CallbackResolverProtocol
from .notifier import NotifierProtocol
from .property_accessor import PropertyAccessorProtocol

__all__ = [
    "CallbackHandler",
    "CallbackResolverProtocol",
    "NotifierProtocol",
    "PropertyAccessorProtocol",
]
