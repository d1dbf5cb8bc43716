"""
Evento efêmero de transição.

Criado a cada avaliação (`can`) ou aplicação (`apply`), passado por
callbacks e listeners e descartado quando a chamada retorna. Listeners
podem vetar a transição via `reject()` durante TEST/PRE.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from multistate.graph.model import TransitionSpec
    from multistate.manager.machine import StateMachine


class SignalKind(StrEnum):
    """Sinais emitidos ao notificador."""

    TEST_TRANSITION = "multistate.test_transition"
    PRE_TRANSITION = "multistate.pre_transition"
    POST_TRANSITION = "multistate.post_transition"

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class TransitionEvent:
    """
    Contexto de uma transição em avaliação ou em aplicação.

    Attributes:
        transition: Nome da transição
        states: Snapshot do conjunto de estados no momento da criação
        spec: Spec da transição (origem/destino)
        machine: Máquina que originou o evento
        state: Estado do ramo avaliado em `can` (None durante `apply`)
    """

    transition: str
    states: tuple[Hashable, ...]
    spec: TransitionSpec
    machine: StateMachine
    state: Hashable | None = None
    _rejected: bool = field(default=False, init=False, repr=False)

    @property
    def rejected(self) -> bool:
        return self._rejected

    def is_rejected(self) -> bool:
        return self._rejected

    def reject(self, rejected: bool = True) -> None:
        """Marca o evento como vetado (ou desfaz o veto com rejected=False)."""
        self._rejected = rejected

    @property
    def entity(self) -> Any:
        return self.machine.get_entity()

    @property
    def graph_name(self) -> str:
        return self.machine.get_graph_name()

    def to_log_dict(self) -> dict[str, Any]:
        """Representação segura para logs (sem a entidade)."""
        return {
            "graph": self.graph_name,
            "transition": self.transition,
            "states": [str(s) for s in self.states],
            "branch_state": None if self.state is None else str(self.state),
            "rejected": self._rejected,
        }
