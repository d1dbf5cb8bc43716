"""Exceções compartilhadas do motor de transições."""

from .exceptions import (
    CallbackResolutionError,
    GraphConfigError,
    GraphNotFound,
    InvalidEntityBinding,
    PropertyAccessFailure,
    StateMachineError,
    TransitionNotAllowed,
    UndeclaredState,
    UnknownTransition,
)

__all__ = [
    "CallbackResolutionError",
    "GraphConfigError",
    "GraphNotFound",
    "InvalidEntityBinding",
    "PropertyAccessFailure",
    "StateMachineError",
    "TransitionNotAllowed",
    "UndeclaredState",
    "UnknownTransition",
]
