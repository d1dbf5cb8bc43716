"""Testes da StateMachineFactory."""

from __future__ import annotations

import gc
import weakref
from types import SimpleNamespace

import pytest

from multistate import (
    EventDispatcher,
    Graph,
    GraphNotFound,
    InvalidEntityBinding,
    SignalKind,
    StateMachine,
    StateMachineFactory,
)


class Ticket:
    def __init__(self, *states: str) -> None:
        self.state = list(states)


class TestStateMachineFactory:
    """Seleção de grafo e cache de máquinas."""

    @pytest.fixture
    def factory(self, order_graph) -> StateMachineFactory:
        ticket_graph = {
            "graph": "default",
            "states": ["open", "closed"],
            "transitions": {"close": {"from": ["open"], "to": ["closed"]}},
        }
        return StateMachineFactory([order_graph, ticket_graph])

    def test_get_returns_machine_for_named_graph(self, factory, make_order) -> None:
        order = make_order("checkout")
        machine = factory.get(order, "order")

        assert isinstance(machine, StateMachine)
        assert machine.get_graph_name() == "order"
        assert machine.get_entity() is order

    def test_default_graph_name(self, factory) -> None:
        machine = factory.get(Ticket("open"))
        assert machine.get_graph_name() == "default"
        assert machine.can("close") is True

    def test_machines_are_cached_per_entity_and_graph(self, factory, make_order) -> None:
        order = make_order("checkout")
        assert factory.get(order, "order") is factory.get(order, "order")
        assert factory.get(make_order("checkout"), "order") is not factory.get(order, "order")

    def test_clear_drops_cache(self, factory, make_order) -> None:
        order = make_order("checkout")
        first = factory.get(order, "order")
        factory.clear()
        assert factory.get(order, "order") is not first

    def test_cached_machine_keeps_entity_until_clear(self, factory) -> None:
        ticket = Ticket("open")
        ref = weakref.ref(ticket)
        factory.get(ticket)
        del ticket
        gc.collect()

        assert ref() is not None

        factory.clear()
        gc.collect()
        assert ref() is None

    def test_unknown_graph(self, factory, make_order) -> None:
        with pytest.raises(GraphNotFound) as exc_info:
            factory.get(make_order("checkout"), "shipping")
        assert exc_info.value.graph == "shipping"

    def test_entity_class_restricts_graph(self) -> None:
        graph = Graph.from_definition(
            name="ticket",
            states=["open"],
            transitions={},
            entity_class=Ticket,
        )
        factory = StateMachineFactory([graph])

        assert factory.get(Ticket("open"), "ticket").get_graph() is graph
        with pytest.raises(GraphNotFound):
            factory.get(SimpleNamespace(state=["open"]), "ticket")

    def test_collaborators_are_shared(self, order_graph, make_order) -> None:
        dispatcher = EventDispatcher()
        dispatcher.add_listener(SignalKind.TEST_TRANSITION, lambda event: event.reject())
        factory = StateMachineFactory([order_graph], notifier=dispatcher)

        assert factory.get(make_order("checkout"), "order").can("pay") is False

    def test_invalid_binding_propagates(self, factory) -> None:
        with pytest.raises(InvalidEntityBinding):
            factory.get(SimpleNamespace(status=[]), "order")

    def test_from_directory(self, tmp_path) -> None:
        (tmp_path / "ticket.yaml").write_text(
            "states: [open, closed]\n"
            "transitions:\n"
            "  close: {from: [open], to: [closed]}\n",
            encoding="utf-8",
        )

        factory = StateMachineFactory.from_directory(tmp_path)

        assert [graph.name for graph in factory.graphs] == ["ticket"]
        assert factory.get(Ticket("open"), "ticket").apply("close") is True

    def test_from_directory_uses_settings(self, tmp_path, monkeypatch) -> None:
        (tmp_path / "ticket.yml").write_text("states: [open]\n", encoding="utf-8")
        monkeypatch.setenv("MULTISTATE_GRAPHS_DIR", str(tmp_path))

        factory = StateMachineFactory.from_directory()

        assert [graph.name for graph in factory.graphs] == ["ticket"]

    def test_from_directory_without_configuration(self, monkeypatch) -> None:
        monkeypatch.delenv("MULTISTATE_GRAPHS_DIR", raising=False)
        with pytest.raises(ValueError, match="MULTISTATE_GRAPHS_DIR"):
            StateMachineFactory.from_directory()
