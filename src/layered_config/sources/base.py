# src/layered_config/sources/base.py
"""
Contrato canônico de uma Source (adapter de camada).

Uma Source converte uma entrada externa já materializada (schema, mapa
aninhado, tabela de ambiente, tokens de CLI) em uma lista uniforme de
`RawEntry` para a sua camada fixa.

Decisões arquiteturais:
    - Sources não fazem I/O: recebem a entrada pronta do colaborador externo
    - Sources não compartilham estado mutável e podem rodar em paralelo
    - Sources não resolvem caminhos nem convertem tipos
    - Entradas malformadas viram `SourceFormatError`, nunca são descartadas
      em silêncio: `produce` varre toda a entrada e levanta um único
      `ConfigResolutionError` com todas as falhas da camada
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from layered_config.core.types import Layer, RawEntry


@runtime_checkable
class Source(Protocol):
    """
    Protocolo estrutural de uma Source.

    Atributos obrigatórios:
        - layer: camada fixa produzida por esta Source
    """

    layer: Layer

    def produce(self) -> List[RawEntry]:
        """Produz as entradas brutas da camada."""
        ...
