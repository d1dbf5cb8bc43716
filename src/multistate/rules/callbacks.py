"""
Callbacks de transição e avaliação de fases.

Uma fase (guard, before, after) executa seus callbacks em ordem de
registro. O resultado agregado é o AND lógico dos retornos, mas todos os
callbacks executam mesmo depois do primeiro retorno falso.

Specs em mapa aceitam filtros:
    on / excluded_on: nomes de transição
    from / excluded_from: estados de origem (estado do ramo, ou snapshot)
    to / excluded_to: estados produzidos pela transição
Um callback cujos filtros não são satisfeitos não executa e conta como True.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from multistate.types.event import TransitionEvent

FILTER_KEYS = ("on", "from", "to", "excluded_on", "excluded_from", "excluded_to")

# Expressões de argumento substituídas no momento da chamada
_ARG_RESOLVERS: dict[str, Callable[[TransitionEvent], Any]] = {
    "event": lambda event: event,
    "object": lambda event: event.entity,
    "entity": lambda event: event.entity,
    "machine": lambda event: event.machine,
}


def _as_tuple(value: Any) -> tuple[Hashable, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return (value,)
    return tuple(value)


class Callback:
    """
    Callback configurado com filtros e argumentos.

    Attributes:
        specs: Spec bruta (filtros, "do", "args")
        handler: Invocável resolvido
    """

    __slots__ = ("_filters", "_args", "handler", "specs")

    def __init__(
        self,
        specs: Mapping[str, Any],
        handler: Callable[..., Any],
        args: Sequence[Any] | None = None,
    ) -> None:
        self.specs = specs
        self.handler = handler
        self._filters = {key: frozenset(_as_tuple(specs.get(key))) for key in FILTER_KEYS}
        raw_args = specs.get("args") if args is None else args
        self._args = None if raw_args is None else _as_tuple(raw_args)

    def is_satisfied_by(self, event: TransitionEvent) -> bool:
        """Verifica se os filtros da spec aceitam o evento."""
        filters = self._filters

        if filters["on"] and event.transition not in filters["on"]:
            return False
        if event.transition in filters["excluded_on"]:
            return False

        origins = (event.state,) if event.state is not None else event.states
        if filters["from"] and not filters["from"].intersection(origins):
            return False
        if filters["excluded_from"].intersection(origins):
            return False

        targets = event.spec.to_states
        if filters["to"] and not filters["to"].intersection(targets):
            return False
        if filters["excluded_to"].intersection(targets):
            return False

        return True

    def call(self, event: TransitionEvent) -> Any:
        """Invoca o handler; sem `args`, recebe apenas o evento."""
        if self._args is None:
            return self.handler(event)
        return self.handler(*(self._resolve_arg(arg, event) for arg in self._args))

    def __call__(self, event: TransitionEvent) -> Any:
        if not self.is_satisfied_by(event):
            return True
        return self.call(event)

    @staticmethod
    def _resolve_arg(arg: Any, event: TransitionEvent) -> Any:
        if isinstance(arg, str) and arg in _ARG_RESOLVERS:
            return _ARG_RESOLVERS[arg](event)
        return arg

    def __repr__(self) -> str:
        name = getattr(self.handler, "__qualname__", repr(self.handler))
        return f"Callback({name})"


def evaluate_callbacks(
    event: TransitionEvent,
    handlers: Iterable[Callable[[TransitionEvent], Any]],
) -> bool:
    """
    Executa todos os handlers da fase e combina os resultados.

    Não há curto-circuito: um retorno falso não impede a execução dos
    handlers seguintes, apenas torna o resultado agregado False.

    Returns:
        AND lógico dos retornos (True para fase vazia)
    """
    result = True
    for handler in handlers:
        result = bool(handler(event)) and result
    return result
