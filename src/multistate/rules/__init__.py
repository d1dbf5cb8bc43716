"""
Exports públicos do módulo multistate/rules.

Callbacks (guard/before/after), avaliação de fases e fábricas.
"""

from multistate.rules.callbacks import FILTER_KEYS, Callback, evaluate_callbacks
from multistate.rules.factory import CallbackFactory, ContainerAwareCallbackFactory

__all__ = [
    "FILTER_KEYS",
    "Callback",
    "CallbackFactory",
    "ContainerAwareCallbackFactory",
    "evaluate_callbacks",
]
