"""
Exports públicos do módulo multistate/types.

Tipos efêmeros trocados com callbacks e listeners.
"""

from multistate.types.event import SignalKind, TransitionEvent

__all__ = [
    "SignalKind",
    "TransitionEvent",
]
