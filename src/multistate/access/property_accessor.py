"""Acessor padrão de propriedades.

Resolve caminhos pontuados (ex: "workflow.state") segmento a segmento:
chave de mapa quando o alvo é um Mapping, atributo caso contrário.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from multistate.protocols.property_accessor import PropertyAccessorProtocol
from utils.errors import PropertyAccessFailure


def _split(path: str, entity: Any) -> list[str]:
    segments = [segment for segment in path.split(".") if segment]
    if not segments:
        raise PropertyAccessFailure(path, entity, "empty property path")
    return segments


def _get(target: Any, segment: str, path: str, entity: Any) -> Any:
    if isinstance(target, Mapping):
        try:
            return target[segment]
        except KeyError:
            raise PropertyAccessFailure(path, entity, f"missing key {segment!r}") from None
    try:
        return getattr(target, segment)
    except AttributeError as exc:
        raise PropertyAccessFailure(path, entity, str(exc)) from exc


class PropertyAccessor(PropertyAccessorProtocol):
    """Leitura/escrita por atributo ou chave, sem cache e sem locking."""

    def read(self, entity: Any, path: str) -> Any:
        target = entity
        for segment in _split(path, entity):
            target = _get(target, segment, path, entity)
        return target

    def write(self, entity: Any, path: str, value: Any) -> None:
        *parents, leaf = _split(path, entity)
        target = entity
        for segment in parents:
            target = _get(target, segment, path, entity)

        if isinstance(target, MutableMapping):
            target[leaf] = value
            return
        if isinstance(target, Mapping):
            raise PropertyAccessFailure(path, entity, "mapping is read-only")
        try:
            setattr(target, leaf, value)
        except (AttributeError, TypeError) as exc:
            raise PropertyAccessFailure(path, entity, str(exc)) from exc
