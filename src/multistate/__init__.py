"""
Módulo multistate: motor de transições para entidades multiestado.

A entidade ocupa um conjunto de estados; cada transição consome um
subconjunto (`from`) e produz outro (`to`).

Estrutura:
    - graph/: Modelo imutável do grafo e loaders (Graph, TransitionSpec)
    - types/: Evento de transição e sinais (TransitionEvent, SignalKind)
    - rules/: Callbacks e fábricas de callback
    - access/: Acessor padrão do campo de estado
    - events/: Notificador em processo (EventDispatcher)
    - protocols/: Contratos dos colaboradores externos
    - manager/: Máquina de estados (StateMachine) e fábrica
"""

from multistate.access import PropertyAccessor
from multistate.events import EventDispatcher
from multistate.graph import (
    DEFAULT_GRAPH_NAME,
    CallbackPhase,
    Graph,
    TransitionSpec,
    build_graph,
    load_graph,
    load_graphs,
    validate_graph,
)
from multistate.manager import StateMachine, StateMachineFactory, create_state_machine
from multistate.protocols import (
    CallbackResolverProtocol,
    NotifierProtocol,
    PropertyAccessorProtocol,
)
from multistate.rules import Callback, CallbackFactory, ContainerAwareCallbackFactory
from multistate.types import SignalKind, TransitionEvent
from utils.errors import (
    CallbackResolutionError,
    GraphConfigError,
    GraphNotFound,
    InvalidEntityBinding,
    PropertyAccessFailure,
    StateMachineError,
    TransitionNotAllowed,
    UndeclaredState,
    UnknownTransition,
)

__all__ = [
    "DEFAULT_GRAPH_NAME",
    # Grafo
    "CallbackPhase",
    # Callbacks
    "Callback",
    "CallbackFactory",
    "CallbackResolutionError",
    "CallbackResolverProtocol",
    "ContainerAwareCallbackFactory",
    # Notificação
    "EventDispatcher",
    "Graph",
    "GraphConfigError",
    "GraphNotFound",
    # Erros
    "InvalidEntityBinding",
    "NotifierProtocol",
    "PropertyAccessFailure",
    # Acesso
    "PropertyAccessor",
    "PropertyAccessorProtocol",
    "SignalKind",
    "StateMachine",
    "StateMachineError",
    "StateMachineFactory",
    "TransitionEvent",
    "TransitionNotAllowed",
    "TransitionSpec",
    "UndeclaredState",
    "UnknownTransition",
    "build_graph",
    "create_state_machine",
    "load_graph",
    "load_graphs",
    "validate_graph",
]
