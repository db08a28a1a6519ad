# src/layered_config/core/trace.py
"""
ResolutionTrace — Event Log estruturado de uma passada de resolução.

A resolução não usa logging global: quem inicializa o processo pode
injetar um `ResolutionTrace` e inspecionar, após a passada, a sequência
ordenada de eventos explícitos emitidos pelo orquestrador e pelo Merge
Engine (camadas aplicadas, folhas sobrescritas, entradas rejeitadas).

Princípios fundamentais:
    - Nenhum evento é emitido implicitamente
    - A ordem de `events` reflete a ordem real da passada
    - Timestamps são UTC (ISO 8601)
    - O trace nunca influencia a ConfigTree produzida

Limites explícitos:
    - Não persiste eventos
    - Não formata saída para terminal
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class ResolutionTrace:
    """Coletor de eventos de uma passada de resolução."""

    events: List[Dict[str, Any]] = field(default_factory=list)

    def log(self, *, event: str, level: str = "INFO", message: str = "", **extra: Any) -> None:
        entry = {
            "event": event,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        entry.update(extra)
        self.events.append(entry)

    def of(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["event"] == event]
