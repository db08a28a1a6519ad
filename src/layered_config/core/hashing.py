# src/layered_config/core/hashing.py
"""
Fingerprint canônico da configuração resolvida.

O fingerprint representa a identidade estrutural da configuração efetiva
(valores, nunca camadas de origem) e é exposto por `ConfigTree.fingerprint`
e pela ferramenta `show --fingerprint`.

Política:
    - JSON canônico: chaves ordenadas, separadores compactos, UTF-8
    - Valores não finitos são recusados (não existem em JSON padrão)
    - SHA-256 sobre os bytes do JSON canônico

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from collections.abc import Mapping
from typing import Any


def canonical_json(config: Mapping) -> str:
    """
    Serializa um mapa aninhado em JSON canônico.

    Raises:
        TypeError: Se `config` não for um mapa.
        ValueError: Se algum float não for finito.
    """
    if not isinstance(config, Mapping):
        raise TypeError(
            f"Config para fingerprint deve ser um mapa, recebido: {type(config).__name__}"
        )
    return json.dumps(
        _plain(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def _plain(node: Any) -> Any:
    if isinstance(node, Mapping):
        return {str(k): _plain(v) for k, v in node.items()}
    return node


def compute_config_hash(config: Mapping) -> str:
    """SHA-256 hexadecimal de `canonical_json(config)`."""
    return hashlib.sha256(canonical_json(config).encode("utf-8")).hexdigest()
