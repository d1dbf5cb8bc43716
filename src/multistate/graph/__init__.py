"""
Exports públicos do módulo multistate/graph.

Modelo imutável do grafo e carregamento de configuração.
"""

from multistate.graph.loader import (
    GraphDefinition,
    TransitionDefinition,
    build_graph,
    load_graph,
    load_graphs,
)
from multistate.graph.model import (
    DEFAULT_GRAPH_NAME,
    CallbackPhase,
    Graph,
    TransitionSpec,
    validate_graph,
)

__all__ = [
    "DEFAULT_GRAPH_NAME",
    "CallbackPhase",
    "Graph",
    "GraphDefinition",
    "TransitionDefinition",
    "TransitionSpec",
    "build_graph",
    "load_graph",
    "load_graphs",
    "validate_graph",
]
