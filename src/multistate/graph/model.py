"""
Modelo imutável do grafo de estados.

Um grafo descreve os estados declarados, as transições (cada uma com um
conjunto de origem e um conjunto de destino) e os callbacks registrados
por fase. É construído uma vez e apenas consultado depois disso.

Estados citados em `from`/`to` não precisam estar declarados na
construção; apenas os estados produzidos são validados, no momento da
mutação (ver StateMachine.set_state).
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from config.settings.machine import get_machine_settings
from utils.errors import UnknownTransition

DEFAULT_GRAPH_NAME = "default"


class CallbackPhase(StrEnum):
    """Fases em que callbacks podem ser registrados."""

    GUARD = "guard"
    BEFORE = "before"
    AFTER = "after"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class TransitionSpec:
    """
    Aresta nomeada do grafo.

    Attributes:
        name: Nome da transição
        from_states: Estados consumidos
        to_states: Estados produzidos
    """

    name: str
    from_states: frozenset[Hashable]
    to_states: frozenset[Hashable]

    @property
    def is_join(self) -> bool:
        """Transição que consome mais de um estado concorrente."""
        return len(self.from_states) > 1

    def to_log_dict(self) -> dict[str, Any]:
        """Representação segura para logs."""
        return {
            "transition": self.name,
            "from": sorted(str(s) for s in self.from_states),
            "to": sorted(str(s) for s in self.to_states),
        }


def _freeze_callbacks(
    callbacks: Mapping[str, Iterable[Any]] | None,
) -> Mapping[str, tuple[Any, ...]]:
    frozen: dict[str, tuple[Any, ...]] = {}
    for phase, specs in (callbacks or {}).items():
        # Fase pode vir como lista ou como mapa nome -> spec
        values = specs.values() if isinstance(specs, Mapping) else specs
        frozen[str(phase)] = tuple(values)
    return MappingProxyType(frozen)


@dataclass(frozen=True, slots=True)
class Graph:
    """
    Descrição validada de estados, transições e callbacks.

    Attributes:
        name: Nome do grafo
        states: Estados declarados (ordem de declaração preservada)
        transitions: Mapa nome -> TransitionSpec (ordem de declaração preservada)
        callbacks: Mapa fase -> specs de callback em ordem de registro
        property_path: Onde o conjunto de estados vive na entidade
        entity_class: Classe de entidade à qual o grafo se aplica (opcional)
    """

    name: str = DEFAULT_GRAPH_NAME
    states: tuple[Hashable, ...] = ()
    transitions: Mapping[str, TransitionSpec] = field(default_factory=dict)
    callbacks: Mapping[str, tuple[Any, ...]] = field(default_factory=dict)
    property_path: str = ""
    entity_class: type | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "states", tuple(dict.fromkeys(self.states)))
        object.__setattr__(
            self, "transitions", MappingProxyType(dict(self.transitions))
        )
        object.__setattr__(self, "callbacks", _freeze_callbacks(self.callbacks))
        if not self.property_path:
            object.__setattr__(
                self,
                "property_path",
                get_machine_settings().default_property_path,
            )

    @classmethod
    def from_definition(
        cls,
        name: str = DEFAULT_GRAPH_NAME,
        states: Iterable[Hashable] = (),
        transitions: Mapping[str, Mapping[str, Iterable[Hashable]]] | None = None,
        callbacks: Mapping[str, Iterable[Any]] | None = None,
        property_path: str | None = None,
        entity_class: type | None = None,
    ) -> Graph:
        """
        Constrói o grafo a partir de estruturas simples.

        Args:
            transitions: Mapa nome -> {"from": [...], "to": [...]}

        Returns:
            Graph imutável
        """
        specs = {
            transition_name: TransitionSpec(
                name=transition_name,
                from_states=frozenset(definition.get("from", ())),
                to_states=frozenset(definition.get("to", ())),
            )
            for transition_name, definition in (transitions or {}).items()
        }
        return cls(
            name=name,
            states=tuple(states),
            transitions=specs,
            callbacks=callbacks or {},
            property_path=property_path or "",
            entity_class=entity_class,
        )

    def transition_spec(self, name: str) -> TransitionSpec:
        """
        Retorna a spec da transição.

        Raises:
            UnknownTransition: Se a transição não existe no grafo
        """
        try:
            return self.transitions[name]
        except KeyError:
            raise UnknownTransition(name, self.name) from None

    def has_transition(self, name: str) -> bool:
        return name in self.transitions

    def is_valid_state(self, state: Hashable) -> bool:
        """Verifica se o estado foi declarado no grafo."""
        return state in self.states

    def transition_names(self) -> list[str]:
        """Nomes das transições em ordem de declaração."""
        return list(self.transitions)

    def callbacks_for(self, phase: CallbackPhase | str) -> tuple[Any, ...]:
        """Specs de callback da fase, em ordem de registro (vazio se ausente)."""
        return self.callbacks.get(str(phase), ())

    def applies_to(self, entity: Any) -> bool:
        """Verifica se o grafo pode ser usado com a entidade."""
        return self.entity_class is None or isinstance(entity, self.entity_class)


def validate_graph(graph: Graph) -> list[str]:
    """
    Valida a integridade estrutural do grafo.

    Verifica:
    - Transições sem origem ou sem destino
    - Destinos não declarados (falhariam em apply)
    - Fases de callback desconhecidas

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    if not graph.name:
        errors.append("Nome do grafo não pode ser vazio")

    if not graph.states:
        errors.append(f"Grafo {graph.name} não declara estados")

    for name, spec in graph.transitions.items():
        if not name:
            errors.append("Transição com nome vazio")
        if not spec.from_states:
            errors.append(f"Transição {name}: conjunto de origem vazio")
        if not spec.to_states:
            errors.append(f"Transição {name}: conjunto de destino vazio")
        for target in spec.to_states:
            if not graph.is_valid_state(target):
                errors.append(f"Transição {name} → {target}: destino não declarado")

    known_phases = {phase.value for phase in CallbackPhase}
    for phase in graph.callbacks:
        if phase not in known_phases:
            errors.append(f"Fase de callback desconhecida: {phase}")

    return errors
