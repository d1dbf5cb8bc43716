"""Configuração do pytest para o projeto multistate."""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from config.settings.machine import get_machine_settings  # noqa: E402
from multistate.graph.model import Graph  # noqa: E402


@dataclass
class Order:
    """Entidade simples com campo de estado multivalorado."""

    state: Any = field(default_factory=list)
    reference: str = "order-1"


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_machine_settings.cache_clear()
    yield
    get_machine_settings.cache_clear()


@pytest.fixture
def order_graph() -> Graph:
    """Grafo com transição simples, fork e join."""
    return Graph.from_definition(
        name="order",
        states=["checkout", "paid", "packed", "invoiced", "shipped", "cancelled"],
        transitions={
            "pay": {"from": ["checkout"], "to": ["paid"]},
            "fulfil": {"from": ["paid"], "to": ["packed", "invoiced"]},
            "ship": {"from": ["packed", "invoiced"], "to": ["shipped"]},
            "void": {"from": ["paid"], "to": ["cancelled"]},
        },
    )


@pytest.fixture
def make_order():
    def _make(*states: Any) -> Order:
        return Order(state=list(states))

    return _make
