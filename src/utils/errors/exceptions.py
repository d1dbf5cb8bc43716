"""Exceções do motor de transições multiestado.

Todas as falhas são visíveis ao chamador e nenhuma é repetida
internamente pelo motor. O contexto (transição, grafo, estado, entidade)
fica disponível como atributo para logs estruturados.
"""

from __future__ import annotations

from typing import Any


def _entity_label(entity: Any) -> str:
    return type(entity).__name__


class StateMachineError(Exception):
    """Base para todas as falhas do motor."""


class PropertyAccessFailure(StateMachineError):
    """Caminho de propriedade não pôde ser lido/escrito na entidade."""

    def __init__(self, path: str, entity: Any, reason: str = "") -> None:
        self.path = path
        self.entity = entity
        self.reason = reason
        message = f'Cannot access property path "{path}" on object {_entity_label(entity)}'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidEntityBinding(StateMachineError):
    """Entidade não expõe o campo de estado configurado (falha na construção)."""

    def __init__(self, path: str, entity: Any, graph: str) -> None:
        self.path = path
        self.entity = entity
        self.graph = graph
        super().__init__(
            f'Cannot access to configured property path "{path}" '
            f'on object {_entity_label(entity)} with graph "{graph}"'
        )


class UnknownTransition(StateMachineError):
    """Transição referenciada não existe no grafo."""

    def __init__(self, transition: str, graph: str, entity: Any = None) -> None:
        self.transition = transition
        self.graph = graph
        self.entity = entity
        target = f' on object "{_entity_label(entity)}"' if entity is not None else ""
        super().__init__(
            f'Transition "{transition}" does not exist{target} with graph "{graph}"'
        )


class TransitionNotAllowed(StateMachineError):
    """`apply` estrito chamado quando `can` retorna False."""

    def __init__(
        self,
        transition: str,
        states: tuple[Any, ...],
        entity: Any,
        graph: str,
    ) -> None:
        self.transition = transition
        self.states = states
        self.entity = entity
        self.graph = graph
        rendered = ", ".join(str(s) for s in states)
        super().__init__(
            f'Transition "{transition}" cannot be applied on states [{rendered}] '
            f'of object "{_entity_label(entity)}" with graph "{graph}"'
        )


class UndeclaredState(StateMachineError):
    """Estado de destino não declarado nos estados do grafo."""

    def __init__(self, state: Any, entity: Any, graph: str) -> None:
        self.state = state
        self.entity = entity
        self.graph = graph
        super().__init__(
            f'Cannot set the state to "{state}" to object "{_entity_label(entity)}" '
            f'with graph "{graph}" because it is not pre-defined.'
        )


class CallbackResolutionError(StateMachineError):
    """Spec de callback inválida ou impossível de resolver."""

    def __init__(self, spec: Any, reason: str) -> None:
        self.spec = spec
        self.reason = reason
        super().__init__(f"Invalid callback spec {spec!r}: {reason}")


class GraphConfigError(StateMachineError):
    """Configuração de grafo malformada."""

    def __init__(self, graph: str, errors: list[str]) -> None:
        self.graph = graph
        self.errors = errors
        super().__init__(f'Invalid configuration for graph "{graph}": ' + "; ".join(errors))


class GraphNotFound(StateMachineError):
    """Nenhum grafo registrado para a entidade/nome pedidos."""

    def __init__(self, graph: str, entity: Any) -> None:
        self.graph = graph
        self.entity = entity
        super().__init__(
            f'Cannot create a state machine because there is no graph "{graph}" '
            f"for object {_entity_label(entity)}"
        )
