"""Contrato de leitura/escrita do campo de estado da entidade."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class PropertyAccessorProtocol(ABC):
    """Lê e escreve o valor em `path` na entidade.

    Implementações levantam PropertyAccessFailure quando o caminho não
    resolve. Atomicidade entre escritores concorrentes não é garantida
    pelo motor; se necessária, deve ser provida aqui.
    """

    @abstractmethod
    def read(self, entity: Any, path: str) -> Any: ...

    @abstractmethod
    def write(self, entity: Any, path: str, value: Any) -> None: ...
