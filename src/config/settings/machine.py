"""Settings do motor de transições.

Configurações lidas do ambiente: caminho padrão da propriedade de
estado, logging e diretório de grafos.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_PROPERTY_PATH = "state"
DEFAULT_SERVICE_NAME = "multistate"

_VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class MachineSettings:
    """Configurações do motor.

    Attributes:
        default_property_path: Campo de estado usado quando o grafo não define um
        log_level: Nível de log aplicado por configure_logging
        service_name: Nome do serviço injetado nos logs
        graphs_dir: Diretório com arquivos YAML/JSON de grafos (opcional)
    """

    default_property_path: str = DEFAULT_PROPERTY_PATH
    log_level: str = "INFO"
    service_name: str = DEFAULT_SERVICE_NAME
    graphs_dir: Path | None = None

    def validate(self) -> list[str]:
        """Valida as configurações.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if not self.default_property_path.strip():
            errors.append("MULTISTATE_PROPERTY_PATH não pode ser vazio")

        if self.log_level.upper() not in _VALID_LOG_LEVELS:
            errors.append(f"MULTISTATE_LOG_LEVEL inválido: {self.log_level}")

        if not self.service_name:
            errors.append("MULTISTATE_SERVICE_NAME não pode ser vazio")

        if self.graphs_dir is not None and not self.graphs_dir.is_dir():
            errors.append(f"MULTISTATE_GRAPHS_DIR não é um diretório: {self.graphs_dir}")

        return errors


def _load_machine_from_env() -> MachineSettings:
    """Carrega MachineSettings de variáveis de ambiente."""
    graphs_dir = os.getenv("MULTISTATE_GRAPHS_DIR", "")
    return MachineSettings(
        default_property_path=os.getenv("MULTISTATE_PROPERTY_PATH", DEFAULT_PROPERTY_PATH),
        log_level=os.getenv("MULTISTATE_LOG_LEVEL", "INFO"),
        service_name=os.getenv("MULTISTATE_SERVICE_NAME", DEFAULT_SERVICE_NAME),
        graphs_dir=Path(graphs_dir) if graphs_dir else None,
    )


@lru_cache(maxsize=1)
def get_machine_settings() -> MachineSettings:
    """Retorna instância cacheada de MachineSettings."""
    return _load_machine_from_env()
