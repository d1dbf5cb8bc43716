"""Notificador síncrono em processo.

Listeners são chamados na thread do chamador, por prioridade decrescente
e, em empate, na ordem de registro. Exceções de listeners propagam.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import TYPE_CHECKING

from config.logging import get_logger
from multistate.protocols.notifier import NotifierProtocol
from multistate.types.event import SignalKind

if TYPE_CHECKING:
    from multistate.types.event import TransitionEvent

logger = get_logger(__name__)

Listener = Callable[["TransitionEvent"], object]


class EventDispatcher(NotifierProtocol):
    """Registro de listeners por tipo de sinal."""

    __slots__ = ("_listeners", "_sequence")

    def __init__(self) -> None:
        self._listeners: dict[SignalKind, list[tuple[int, int, Listener]]] = defaultdict(list)
        self._sequence = 0

    def add_listener(self, kind: SignalKind | str, listener: Listener, priority: int = 0) -> None:
        """Registra listener; maior prioridade é chamada primeiro."""
        self._sequence += 1
        entries = self._listeners[SignalKind(kind)]
        entries.append((priority, self._sequence, listener))
        entries.sort(key=lambda entry: (-entry[0], entry[1]))

    def remove_listener(self, kind: SignalKind | str, listener: Listener) -> bool:
        """Remove todas as ocorrências do listener. Retorna True se removeu algo."""
        entries = self._listeners.get(SignalKind(kind), [])
        kept = [entry for entry in entries if entry[2] != listener]
        removed = len(kept) != len(entries)
        if removed:
            self._listeners[SignalKind(kind)] = kept
        return removed

    def listeners(self, kind: SignalKind | str) -> list[Listener]:
        return [entry[2] for entry in self._listeners.get(SignalKind(kind), [])]

    def has_listeners(self, kind: SignalKind | str | None = None) -> bool:
        if kind is None:
            return any(self._listeners.values())
        return bool(self._listeners.get(SignalKind(kind)))

    def notify(self, kind: SignalKind, event: TransitionEvent) -> None:
        entries = list(self._listeners.get(SignalKind(kind), []))
        if not entries:
            return
        logger.debug(
            "Dispatching %s to %d listener(s)",
            kind,
            len(entries),
            extra={"signal": str(kind), "transition": event.transition},
        )
        for _, _, listener in entries:
            listener(event)
