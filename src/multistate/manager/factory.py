"""
Fábrica de máquinas de estado.

Mantém os grafos registrados e devolve uma StateMachine por
(entidade, nome do grafo), reutilizando a instância enquanto a mesma
entidade for pedida.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from config.logging import get_logger
from config.settings.machine import get_machine_settings
from multistate.graph.loader import build_graph, load_graphs
from multistate.graph.model import DEFAULT_GRAPH_NAME, Graph
from multistate.manager.machine import StateMachine
from multistate.protocols.callback_resolver import CallbackResolverProtocol
from multistate.protocols.notifier import NotifierProtocol
from multistate.protocols.property_accessor import PropertyAccessorProtocol
from utils.errors import GraphNotFound

logger = get_logger(__name__)


class StateMachineFactory:
    """
    Registro de grafos e cache de máquinas.

    Grafos com `entity_class` só são usados para entidades daquela classe;
    o primeiro grafo registrado que combina nome e classe vence.

    Cada máquina em cache mantém referência forte à sua entidade; o cache
    só encolhe com `clear()`, que é a única forma de liberar as entidades.
    """

    def __init__(
        self,
        graphs: Iterable[Graph | Mapping[str, Any]] = (),
        notifier: NotifierProtocol | None = None,
        callback_resolver: CallbackResolverProtocol | None = None,
        property_accessor: PropertyAccessorProtocol | None = None,
        machine_class: type[StateMachine] = StateMachine,
    ) -> None:
        self._graphs: list[Graph] = []
        self._machines: dict[tuple[int, str], StateMachine] = {}
        self._notifier = notifier
        self._callback_resolver = callback_resolver
        self._property_accessor = property_accessor
        self._machine_class = machine_class
        for graph in graphs:
            self.add_graph(graph)

    @classmethod
    def from_directory(cls, directory: Path | str | None = None, **kwargs: Any) -> StateMachineFactory:
        """
        Cria a fábrica com os grafos de um diretório.

        Sem diretório explícito, usa MULTISTATE_GRAPHS_DIR.

        Raises:
            ValueError: Se nenhum diretório foi informado/configurado
        """
        if directory is None:
            directory = get_machine_settings().graphs_dir
        if directory is None:
            raise ValueError("Nenhum diretório de grafos informado (MULTISTATE_GRAPHS_DIR)")
        return cls(load_graphs(directory), **kwargs)

    @property
    def graphs(self) -> list[Graph]:
        return list(self._graphs)

    def add_graph(self, graph: Graph | Mapping[str, Any]) -> Graph:
        """Registra um grafo (Graph ou configuração bruta)."""
        built = graph if isinstance(graph, Graph) else build_graph(graph)
        self._graphs.append(built)
        return built

    def get(self, entity: Any, graph_name: str = DEFAULT_GRAPH_NAME) -> StateMachine:
        """
        Retorna a máquina da entidade para o grafo pedido.

        Raises:
            GraphNotFound: Se nenhum grafo registrado combina nome e entidade
            InvalidEntityBinding: Se a entidade não expõe o campo de estado
        """
        key = (id(entity), graph_name)
        machine = self._machines.get(key)
        if machine is not None:
            return machine

        graph = self._find_graph(entity, graph_name)
        machine = self._machine_class(
            entity,
            graph,
            notifier=self._notifier,
            callback_resolver=self._callback_resolver,
            property_accessor=self._property_accessor,
        )
        self._machines[key] = machine
        logger.debug(
            "State machine created",
            extra={"graph": graph_name, "entity": type(entity).__name__},
        )
        return machine

    def clear(self) -> None:
        """Descarta as máquinas em cache."""
        self._machines.clear()

    def _find_graph(self, entity: Any, graph_name: str) -> Graph:
        for graph in self._graphs:
            if graph.name == graph_name and graph.applies_to(entity):
                return graph
        raise GraphNotFound(graph_name, entity)
