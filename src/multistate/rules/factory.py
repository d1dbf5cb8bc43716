"""
Resolução de specs de callback (fábricas).

Formas de spec aceitas:
    - invocável já pronto (retornado como está)
    - "pacote.modulo:atributo" (importado)
    - mapa com "do" (+ filtros e "args"), convertido em Callback

ContainerAwareCallbackFactory resolve também serviços de um container:
    "@servico", "@servico.metodo" ou ["@servico", "metodo"].
"""

from __future__ import annotations

import importlib
from collections.abc import Callable, Mapping
from typing import Any

from multistate.protocols.callback_resolver import CallbackHandler, CallbackResolverProtocol
from multistate.rules.callbacks import Callback
from utils.errors import CallbackResolutionError


def _import_target(spec: Any, target: str) -> Any:
    module_name, _, attribute_path = target.partition(":")
    if not module_name or not attribute_path:
        raise CallbackResolutionError(spec, f'expected "module:attribute", got "{target}"')
    try:
        resolved: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise CallbackResolutionError(spec, f"cannot import {module_name}") from exc
    for attribute in attribute_path.split("."):
        try:
            resolved = getattr(resolved, attribute)
        except AttributeError as exc:
            raise CallbackResolutionError(spec, f"{target} not found") from exc
    return resolved


class CallbackFactory(CallbackResolverProtocol):
    """Fábrica padrão: invocáveis passam direto, o resto é resolvido."""

    def __init__(self, callback_class: type[Callback] = Callback) -> None:
        if not issubclass(callback_class, Callback):
            raise TypeError(f"{callback_class!r} must be a subclass of Callback")
        self.callback_class = callback_class

    def resolve(self, spec: Any) -> CallbackHandler:
        if isinstance(spec, Callback):
            return spec
        if isinstance(spec, Mapping):
            if "do" not in spec:
                raise CallbackResolutionError(spec, 'missing "do" key')
            return self.callback_class(spec, self._resolve_callable(spec, spec["do"]))
        return self._resolve_callable(spec, spec)

    # Alias
    get = resolve

    def _resolve_callable(self, spec: Any, target: Any) -> Callable[..., Any]:
        if isinstance(target, str):
            resolved = _import_target(spec, target)
        elif isinstance(target, (list, tuple)) and len(target) == 2 and isinstance(target[1], str):
            owner = self._resolve_owner(spec, target[0])
            resolved = getattr(owner, target[1], None)
        else:
            resolved = target

        if not callable(resolved):
            raise CallbackResolutionError(spec, f"{target!r} is not callable")
        return resolved

    def _resolve_owner(self, spec: Any, owner: Any) -> Any:
        if isinstance(owner, str):
            return _import_target(spec, owner)
        return owner


class ContainerAwareCallbackFactory(CallbackFactory):
    """Fábrica que resolve referências "@servico" em um container de serviços."""

    def __init__(
        self,
        container: Mapping[str, Any],
        callback_class: type[Callback] = Callback,
    ) -> None:
        super().__init__(callback_class)
        self.container = container

    def _service(self, spec: Any, reference: str) -> Any:
        name = reference[1:]
        try:
            return self.container[name]
        except KeyError:
            raise CallbackResolutionError(spec, f'service "{name}" not found in container') from None

    def _resolve_callable(self, spec: Any, target: Any) -> Callable[..., Any]:
        if isinstance(target, str) and target.startswith("@"):
            service_name, _, method = target.partition(".")
            service = self._service(spec, service_name)
            resolved = getattr(service, method, None) if method else service
            if not callable(resolved):
                raise CallbackResolutionError(spec, f"{target!r} is not callable")
            return resolved
        return super()._resolve_callable(spec, target)

    def _resolve_owner(self, spec: Any, owner: Any) -> Any:
        if isinstance(owner, str) and owner.startswith("@"):
            return self._service(spec, owner)
        return super()._resolve_owner(spec, owner)
