"""Testes do modelo de grafo, validação estrutural e loaders YAML/JSON."""

from __future__ import annotations

import json

import pytest

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
from utils.errors import GraphConfigError, UnknownTransition

ORDER_YAML = """
graph: order
states: [checkout, paid, packed, invoiced, shipped]
transitions:
  pay: {from: checkout, to: [paid]}
  fulfil: {from: [paid], to: [packed, invoiced]}
  ship: {from: [packed, invoiced], to: [shipped]}
callbacks:
  guard:
    check_stock: {"on": ship, do: "orders.rules:can_ship"}
  after:
    - {do: "orders.audit:record"}
"""


class TestGraphModel:
    """Consultas e imutabilidade do Graph."""

    def test_transition_spec_lookup(self, order_graph) -> None:
        spec = order_graph.transition_spec("ship")
        assert isinstance(spec, TransitionSpec)
        assert spec.from_states == frozenset({"packed", "invoiced"})
        assert spec.to_states == frozenset({"shipped"})
        assert spec.is_join is True
        assert order_graph.transition_spec("pay").is_join is False

    def test_unknown_transition(self, order_graph) -> None:
        with pytest.raises(UnknownTransition, match='Transition "nope" does not exist'):
            order_graph.transition_spec("nope")

    def test_is_valid_state(self, order_graph) -> None:
        assert order_graph.is_valid_state("paid") is True
        assert order_graph.is_valid_state("ghost") is False

    def test_declaration_order_is_kept(self, order_graph) -> None:
        assert order_graph.transition_names() == ["pay", "fulfil", "ship", "void"]
        assert order_graph.states[0] == "checkout"

    def test_defaults(self) -> None:
        graph = Graph()
        assert graph.name == DEFAULT_GRAPH_NAME
        assert graph.property_path == "state"
        assert graph.callbacks_for(CallbackPhase.GUARD) == ()

    def test_property_path_default_comes_from_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("MULTISTATE_PROPERTY_PATH", "marking")
        assert Graph().property_path == "marking"
        assert Graph(property_path="status").property_path == "status"

    def test_graph_is_immutable(self, order_graph) -> None:
        with pytest.raises(AttributeError):
            order_graph.name = "other"  # type: ignore[misc]
        with pytest.raises(TypeError):
            order_graph.transitions["new"] = None  # type: ignore[index]

    def test_callbacks_mapping_keeps_registration_order(self) -> None:
        first, second = object(), object()
        graph = Graph(callbacks={"before": {"b": first, "a": second}})
        assert graph.callbacks_for("before") == (first, second)

    def test_applies_to_entity_class(self) -> None:
        class Ticket:
            state: list[str] = []

        graph = Graph(entity_class=Ticket)
        assert graph.applies_to(Ticket()) is True
        assert graph.applies_to(object()) is False
        assert Graph().applies_to(object()) is True


class TestValidateGraph:
    """validate_graph reporta problemas sem levantar exceção."""

    def test_valid_graph_has_no_errors(self, order_graph) -> None:
        assert validate_graph(order_graph) == []

    def test_reports_structural_problems(self) -> None:
        graph = Graph.from_definition(
            name="broken",
            states=["a"],
            transitions={
                "empty": {"from": [], "to": ["a"]},
                "dangling": {"from": ["a"], "to": ["z"]},
            },
            callbacks={"during": []},
        )

        errors = validate_graph(graph)

        assert "Transição empty: conjunto de origem vazio" in errors
        assert "Transição dangling → z: destino não declarado" in errors
        assert "Fase de callback desconhecida: during" in errors


class TestBuildGraph:
    """Validação do formato bruto via pydantic."""

    def test_scalar_from_is_coerced(self) -> None:
        graph = build_graph(
            {"states": ["a", "b"], "transitions": {"go": {"from": "a", "to": "b"}}}
        )
        assert graph.transition_spec("go").from_states == frozenset({"a"})
        assert graph.name == DEFAULT_GRAPH_NAME

    def test_invalid_callback_phase(self) -> None:
        with pytest.raises(GraphConfigError) as exc_info:
            build_graph({"graph": "g", "callbacks": {"during": []}})
        assert exc_info.value.graph == "g"
        assert exc_info.value.errors

    def test_transition_without_target(self) -> None:
        with pytest.raises(GraphConfigError):
            build_graph({"graph": "g", "transitions": {"go": {"from": ["a"]}}})

    def test_unknown_key_is_rejected(self) -> None:
        with pytest.raises(GraphConfigError):
            build_graph({"graph": "g", "sates": ["typo"]})

    def test_non_mapping_config(self) -> None:
        with pytest.raises(GraphConfigError):
            build_graph(["not", "a", "mapping"])  # type: ignore[arg-type]


class TestLoaders:
    """Carregamento de arquivos YAML/JSON."""

    def test_load_yaml_graph(self, tmp_path) -> None:
        path = tmp_path / "order.yaml"
        path.write_text(ORDER_YAML, encoding="utf-8")

        graph = load_graph(path)

        assert graph.name == "order"
        assert graph.transition_names() == ["pay", "fulfil", "ship"]
        assert graph.transition_spec("pay").from_states == frozenset({"checkout"})
        assert graph.callbacks_for("guard") == (
            {"on": "ship", "do": "orders.rules:can_ship"},
        )
        assert graph.callbacks_for("after") == ({"do": "orders.audit:record"},)

    def test_file_name_is_default_graph_name(self, tmp_path) -> None:
        path = tmp_path / "ticket.json"
        path.write_text(
            json.dumps({"states": ["open", "closed"], "transitions": {"close": {"from": ["open"], "to": ["closed"]}}}),
            encoding="utf-8",
        )
        assert load_graph(path).name == "ticket"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_graph(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path) -> None:
        path = tmp_path / "bad.yml"
        path.write_text("states: [a, b\n", encoding="utf-8")
        with pytest.raises(GraphConfigError, match="YAML inválido"):
            load_graph(path)

    def test_unsupported_format(self, tmp_path) -> None:
        path = tmp_path / "graph.toml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(GraphConfigError, match="formato não suportado"):
            load_graph(path)

    def test_load_graphs_from_directory(self, tmp_path) -> None:
        (tmp_path / "b.yaml").write_text("states: [x]\n", encoding="utf-8")
        (tmp_path / "a.yml").write_text("states: [y]\n", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

        graphs = load_graphs(tmp_path)

        assert [graph.name for graph in graphs] == ["a", "b"]
