"""Loader de configuração de grafos (YAML/JSON/dict).

Valida o formato bruto com pydantic e constrói o Graph imutável.

Formato:
    graph: order
    property_path: state
    states: [checkout, paid, packed, shipped]
    transitions:
      pay: {from: [checkout], to: [paid]}
      ship: {from: [paid, packed], to: [shipped]}
    callbacks:
      guard:
        - {"on": ship, do: "orders.rules:can_ship"}
"""

from __future__ import annotations

import json
from collections.abc import Hashable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from multistate.graph.model import DEFAULT_GRAPH_NAME, CallbackPhase, Graph
from utils.errors import GraphConfigError

_SUFFIXES = {".yaml", ".yml", ".json"}


def _as_list(value: Any) -> list[Any]:
    """Aceita escalar ou sequência (`from: a` equivale a `from: [a]`)."""
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set, frozenset)):
        return [value]
    return list(value)


def _require_hashable(values: list[Any]) -> list[Any]:
    for value in values:
        if not isinstance(value, Hashable):
            raise ValueError(f"estado deve ser escalar: {value!r}")
    return values


class TransitionDefinition(BaseModel):
    """Transição como aparece na configuração."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    from_states: list[Any] = Field(alias="from", min_length=1)
    to_states: list[Any] = Field(alias="to", min_length=1)

    @field_validator("from_states", "to_states", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[Any]:
        return _require_hashable(_as_list(value))


class GraphDefinition(BaseModel):
    """Schema bruto de um grafo."""

    model_config = ConfigDict(extra="forbid")

    graph: str = DEFAULT_GRAPH_NAME
    property_path: str | None = None
    states: list[Any] = Field(default_factory=list)
    transitions: dict[str, TransitionDefinition] = Field(default_factory=dict)
    callbacks: dict[CallbackPhase, Any] = Field(default_factory=dict)

    @field_validator("callbacks", mode="before")
    @classmethod
    def _normalize_callbacks(cls, value: Any) -> dict[str, list[Any]]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("callbacks deve ser um mapa fase -> specs")
        normalized: dict[str, list[Any]] = {}
        for phase, specs in value.items():
            if isinstance(specs, Mapping):
                # Mapa nome -> spec: mantém a ordem dos valores
                normalized[phase] = list(specs.values())
            else:
                normalized[phase] = _as_list(specs)
        return normalized


def build_graph(data: Mapping[str, Any], entity_class: type | None = None) -> Graph:
    """
    Valida um mapa de configuração e constrói o Graph.

    Args:
        data: Configuração bruta (ex: resultado de yaml.safe_load)
        entity_class: Classe de entidade à qual o grafo se aplica

    Raises:
        GraphConfigError: Se a configuração tem schema inválido
    """
    if not isinstance(data, Mapping):
        raise GraphConfigError("<unknown>", ["configuração deve ser um mapa"])

    try:
        definition = GraphDefinition.model_validate(dict(data))
    except ValidationError as exc:
        name = str(data.get("graph", DEFAULT_GRAPH_NAME))
        errors = [
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        raise GraphConfigError(name, errors) from exc

    return Graph.from_definition(
        name=definition.graph,
        states=definition.states,
        transitions={
            name: {"from": spec.from_states, "to": spec.to_states}
            for name, spec in definition.transitions.items()
        },
        callbacks={str(phase): specs for phase, specs in definition.callbacks.items()},
        property_path=definition.property_path,
        entity_class=entity_class,
    )


def _read_file(path: Path) -> Any:
    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as stream:
        if suffix in {".yaml", ".yml"}:
            try:
                return yaml.safe_load(stream) or {}
            except yaml.YAMLError as exc:
                raise GraphConfigError(path.stem, [f"YAML inválido: {exc}"]) from exc
        if suffix == ".json":
            try:
                return json.load(stream)
            except json.JSONDecodeError as exc:
                raise GraphConfigError(path.stem, [f"JSON inválido: {exc}"]) from exc
    raise GraphConfigError(path.stem, [f"formato não suportado: {suffix}"])


def load_graph(path: Path | str, entity_class: type | None = None) -> Graph:
    """
    Carrega um grafo de um arquivo YAML ou JSON.

    Sem chave `graph`, o nome do arquivo é usado como nome do grafo.

    Raises:
        FileNotFoundError: Se o arquivo não existe
        GraphConfigError: Se o conteúdo é inválido
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Grafo não encontrado: {path}")

    data = _read_file(path)
    if isinstance(data, Mapping) and "graph" not in data:
        data = {"graph": path.stem, **data}
    return build_graph(data, entity_class=entity_class)


def load_graphs(directory: Path | str) -> list[Graph]:
    """Carrega todos os grafos de um diretório, em ordem alfabética de arquivo."""
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Diretório de grafos não encontrado: {directory}")

    return [
        load_graph(path)
        for path in sorted(directory.iterdir())
        if path.suffix.lower() in _SUFFIXES
    ]
