"""Notificação de eventos de transição."""

from .dispatcher import EventDispatcher, Listener

__all__ = ["EventDispatcher", "Listener"]
