"""Agregador de settings do multistate."""

from __future__ import annotations

from config.settings.machine import (
    DEFAULT_PROPERTY_PATH,
    DEFAULT_SERVICE_NAME,
    MachineSettings,
    get_machine_settings,
)

__all__ = [
    "DEFAULT_PROPERTY_PATH",
    "DEFAULT_SERVICE_NAME",
    "MachineSettings",
    "get_machine_settings",
]
