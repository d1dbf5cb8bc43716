"""
Exports públicos do módulo multistate/manager.

Máquina de estados multiestado e fábrica de máquinas.
"""

from multistate.manager.factory import StateMachineFactory
from multistate.manager.machine import StateMachine, create_state_machine

__all__ = [
    "StateMachine",
    "StateMachineFactory",
    "create_state_machine",
]
