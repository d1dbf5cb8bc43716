"""
Máquina de estados multiestado (StateMachine).

A entidade pode ocupar vários estados ao mesmo tempo. Uma transição
consome o subconjunto `from` presente na entidade e produz o subconjunto
`to`: novo estado = (atual − from) ∪ to.

Disponibilidade (`can`) é avaliada estado a estado:
    - transição de junção (`from` com mais de um estado): todos os estados
      de `from` precisam estar presentes e todo estado atual precisa ser um
      ramo aprovado (um estado fora de `from` torna a junção indisponível);
    - transição simples: basta um ramo disponível.

A máquina não guarda estado próprio: todo estado persistente vive na
entidade, lida a cada chamada. Não há locking em torno do ciclo
leitura → cálculo → escrita; escritores concorrentes sobre a mesma
entidade são responsabilidade do chamador (ou do acessor de propriedade).
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from typing import Any

from config.logging import get_logger, log_rejection
from multistate.access.property_accessor import PropertyAccessor
from multistate.graph.loader import build_graph
from multistate.graph.model import CallbackPhase, Graph, TransitionSpec
from multistate.protocols.callback_resolver import CallbackHandler, CallbackResolverProtocol
from multistate.protocols.notifier import NotifierProtocol
from multistate.protocols.property_accessor import PropertyAccessorProtocol
from multistate.rules.callbacks import evaluate_callbacks
from multistate.rules.factory import CallbackFactory
from multistate.types.event import SignalKind, TransitionEvent
from utils.errors import (
    InvalidEntityBinding,
    PropertyAccessFailure,
    TransitionNotAllowed,
    UndeclaredState,
    UnknownTransition,
)

logger = get_logger(__name__)


def _as_states(value: Any) -> tuple[Hashable, ...]:
    """Normaliza o valor do campo de estado em tupla sem duplicatas."""
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return (value,)
    return tuple(dict.fromkeys(value))


def _as_container(states: list[Hashable], template: Any) -> Any:
    """Escreve de volta no mesmo tipo de coleção lido da entidade."""
    if isinstance(template, frozenset):
        return frozenset(states)
    if isinstance(template, set):
        return set(states)
    if isinstance(template, tuple):
        return tuple(states)
    return list(states)


class StateMachine:
    """
    Avaliador de transições e mutador de estado para uma entidade.

    Attributes:
        entity: Objeto do chamador que guarda o conjunto de estados
        graph: Grafo imutável de estados/transições/callbacks
    """

    __slots__ = ("_accessor", "_entity", "_graph", "_notifier", "_resolved", "_resolver")

    def __init__(
        self,
        entity: Any,
        graph: Graph | Mapping[str, Any],
        notifier: NotifierProtocol | None = None,
        callback_resolver: CallbackResolverProtocol | None = None,
        property_accessor: PropertyAccessorProtocol | None = None,
    ) -> None:
        """
        Vincula a entidade ao grafo.

        Args:
            entity: Objeto com o campo de estado em `graph.property_path`
            graph: Graph ou mapa de configuração bruto
            notifier: Notificador de sinais TEST/PRE/POST (None = sem notificação)
            callback_resolver: Resolvedor de specs (padrão: CallbackFactory)
            property_accessor: Acessor do campo de estado (padrão: PropertyAccessor)

        Raises:
            InvalidEntityBinding: Se o campo de estado não é legível na entidade
        """
        self._entity = entity
        self._graph = graph if isinstance(graph, Graph) else build_graph(graph)
        self._notifier = notifier
        self._resolver = callback_resolver or CallbackFactory()
        self._accessor = property_accessor or PropertyAccessor()
        self._resolved: dict[tuple[str, int], CallbackHandler] = {}

        try:
            self._read_raw()
        except PropertyAccessFailure as exc:
            raise InvalidEntityBinding(
                self._graph.property_path, entity, self._graph.name
            ) from exc

    # Consultas -------------------------------------------------------------

    def get_state(self) -> frozenset[Hashable]:
        """Conjunto de estados atual da entidade."""
        return frozenset(self._read_states())

    def get_entity(self) -> Any:
        return self._entity

    def get_graph(self) -> Graph:
        return self._graph

    def get_graph_name(self) -> str:
        return self._graph.name

    def get_possible_transitions(self) -> list[str]:
        """Transições disponíveis agora, em ordem de declaração do grafo."""
        return [name for name in self._graph.transition_names() if self.can(name)]

    def get_state_summary(self) -> dict[str, Any]:
        """
        Resumo do estado atual para observability.

        Returns:
            Dict com informações seguras para logs
        """
        return {
            "graph": self._graph.name,
            "entity": type(self._entity).__name__,
            "property_path": self._graph.property_path,
            "states": [str(s) for s in self._read_states()],
            "possible_transitions": self.get_possible_transitions(),
        }

    # Avaliação -------------------------------------------------------------

    def can(self, transition: str) -> bool:
        """
        Verifica se a transição está disponível para o conjunto atual.

        Guards executam uma vez por estado atual presente em `from`; os
        demais estados contam como ramos indisponíveis.

        Raises:
            UnknownTransition: Se a transição não existe no grafo
            PropertyAccessFailure: Se o campo de estado não pode ser lido
        """
        spec = self._spec(transition)
        states = self._read_states()

        # Estado fora de `from` conta como ramo indisponível
        availabilities = [
            state in spec.from_states
            and self._evaluate_branch(transition, spec, states, state)
            for state in states
        ]

        if spec.is_join:
            available = spec.from_states.issubset(states) and all(availabilities)
        else:
            available = any(availabilities)

        logger.debug(
            "Transition %s evaluated: %s",
            transition,
            available,
            extra={
                "graph": self._graph.name,
                "transition": transition,
                "states": [str(s) for s in states],
                "available": available,
            },
        )
        return available

    def _evaluate_branch(
        self,
        transition: str,
        spec: TransitionSpec,
        states: tuple[Hashable, ...],
        state: Hashable,
    ) -> bool:
        event = TransitionEvent(transition, states, spec, self, state=state)

        can_guard = True
        if self._notifier is not None:
            self._notifier.notify(SignalKind.TEST_TRANSITION, event)
            can_guard = not event.rejected
            if not can_guard:
                log_rejection(logger, self._graph.name, transition, "listener_rejected", state)

        # Ramo vetado pelo listener não chega a executar os guards
        if not can_guard:
            return False

        guards_pass = self._call_callbacks(event, CallbackPhase.GUARD)
        if not guards_pass:
            log_rejection(logger, self._graph.name, transition, "guard_failed", state)
        return guards_pass

    # Aplicação -------------------------------------------------------------

    def apply(self, transition: str, soft: bool = False) -> bool:
        """
        Aplica a transição: PRE → before → mutação → after → POST.

        Args:
            transition: Nome da transição
            soft: Retorna False em vez de levantar TransitionNotAllowed

        Returns:
            True se aplicada; False se indisponível (soft) ou vetada em PRE

        Raises:
            TransitionNotAllowed: Se indisponível e soft=False
            UnknownTransition: Se a transição não existe (mesmo com soft)
        """
        if not self.can(transition):
            if soft:
                return False
            raise TransitionNotAllowed(
                transition, self._read_states(), self._entity, self._graph.name
            )

        spec = self._spec(transition)
        event = TransitionEvent(transition, self._read_states(), spec, self)

        if self._notifier is not None:
            self._notifier.notify(SignalKind.PRE_TRANSITION, event)
            if event.rejected:
                log_rejection(logger, self._graph.name, transition, "pre_transition_rejected")
                return False

        self._call_callbacks(event, CallbackPhase.BEFORE)

        self.set_state(spec.to_states, spec.from_states)

        self._call_callbacks(event, CallbackPhase.AFTER)

        if self._notifier is not None:
            self._notifier.notify(SignalKind.POST_TRANSITION, event)

        logger.info(
            "Transition %s applied",
            transition,
            extra={
                "graph": self._graph.name,
                **spec.to_log_dict(),
                "states_before": [str(s) for s in event.states],
            },
        )
        return True

    # Mutação ---------------------------------------------------------------

    def set_state(
        self,
        to_states: Iterable[Hashable] | Hashable,
        from_states: Iterable[Hashable] | Hashable = (),
    ) -> None:
        """
        Grava (atual − from_states) ∪ to_states na entidade.

        Estados de destino precisam estar declarados no grafo; estados de
        origem não são validados.

        Raises:
            UndeclaredState: Se algum destino não está declarado (nada é escrito)
            PropertyAccessFailure: Se o campo de estado não pode ser lido/escrito
        """
        targets = _as_states(to_states)
        for target in targets:
            if not self._graph.is_valid_state(target):
                raise UndeclaredState(target, self._entity, self._graph.name)

        consumed = set(_as_states(from_states))
        raw = self._read_raw()

        kept = [state for state in _as_states(raw) if state not in consumed]
        produced = sorted(targets, key=self._graph.states.index)
        new_states = list(dict.fromkeys([*kept, *produced]))

        self._accessor.write(
            self._entity,
            self._graph.property_path,
            _as_container(new_states, raw),
        )

    # Internos --------------------------------------------------------------

    def _spec(self, transition: str) -> TransitionSpec:
        if not self._graph.has_transition(transition):
            raise UnknownTransition(transition, self._graph.name, self._entity)
        return self._graph.transition_spec(transition)

    def _read_raw(self) -> Any:
        return self._accessor.read(self._entity, self._graph.property_path)

    def _read_states(self) -> tuple[Hashable, ...]:
        return _as_states(self._read_raw())

    def _call_callbacks(self, event: TransitionEvent, phase: CallbackPhase) -> bool:
        specs = self._graph.callbacks_for(phase)
        if not specs:
            return True
        handlers = (self._handler(phase, index, spec) for index, spec in enumerate(specs))
        return evaluate_callbacks(event, handlers)

    def _handler(self, phase: CallbackPhase, index: int, spec: Any) -> CallbackHandler:
        """Resolve a spec uma única vez por máquina; invocáveis passam direto."""
        if callable(spec):
            return spec
        key = (str(phase), index)
        handler = self._resolved.get(key)
        if handler is None:
            handler = self._resolver.resolve(spec)
            self._resolved[key] = handler
        return handler

    def __repr__(self) -> str:
        return (
            f"StateMachine(graph={self._graph.name!r}, "
            f"entity={type(self._entity).__name__})"
        )


def create_state_machine(
    entity: Any,
    graph: Graph | Mapping[str, Any],
    notifier: NotifierProtocol | None = None,
    callback_resolver: CallbackResolverProtocol | None = None,
) -> StateMachine:
    """
    Factory function para criar uma StateMachine.

    Returns:
        StateMachine vinculada à entidade
    """
    return StateMachine(
        entity,
        graph,
        notifier=notifier,
        callback_resolver=callback_resolver,
    )
