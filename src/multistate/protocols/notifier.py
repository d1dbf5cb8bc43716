"""Contrato do notificador de eventos de transição (pub/sub)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from multistate.types.event import SignalKind, TransitionEvent


class NotifierProtocol(ABC):
    """Entrega sinais TEST/PRE/POST a listeners externos.

    Listeners podem chamar `event.reject()` em TEST_TRANSITION e
    PRE_TRANSITION para vetar a transição.
    """

    @abstractmethod
    def notify(self, kind: SignalKind, event: TransitionEvent) -> None: ...
