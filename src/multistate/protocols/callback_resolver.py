"""Contrato de resolução de specs de callback em invocáveis."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from multistate.types.event import TransitionEvent

CallbackHandler = Callable[["TransitionEvent"], Any]


class CallbackResolverProtocol(ABC):
    """Transforma uma spec de configuração em algo invocável com o evento.

    O retorno do invocável é interpretado como booleano pelo motor.
    """

    @abstractmethod
    def resolve(self, spec: Any) -> CallbackHandler: ...
