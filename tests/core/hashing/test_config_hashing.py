# tests/core/hashing/test_config_hashing.py
"""
Testes do hashing de configuração.

Este módulo valida a função que gera o fingerprint determinístico da
configuração resolvida, usado pela ConfigTree e pela ferramenta `show`.

Os testes asseguram que:
- configurações equivalentes produzem o mesmo hash
- o hash é independente da ordem das chaves
- o algoritmo corresponde ao SHA-256 do JSON canônico
- entradas que não são dicionários são rejeitadas

Invariantes:
    - O hash retornado possui 64 caracteres
    - O cálculo não depende de estado externo ou ambiente
"""

import hashlib
import json

import pytest

try:
    from layered_config.core.hashing import canonical_json, compute_config_hash
except Exception as e:  # noqa: BLE001
    compute_config_hash = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _canonical_json_bytes(obj: dict) -> bytes:
    """Serialização de referência: chaves ordenadas, separadores compactos, UTF-8."""
    s = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing hashing module. Implement:\n"
            "- src/layered_config/core/hashing.py (compute_config_hash)\n"
            "Policy expected: SHA-256 of canonical JSON serialization.\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_hash_is_deterministic():
    _require_imports()
    h1 = compute_config_hash({"port": 3000, "database": {"port": 5432, "host": "localhost"}})
    h2 = compute_config_hash({"database": {"host": "localhost", "port": 5432}, "port": 3000})
    assert h1 == h2
    assert isinstance(h1, str)
    assert len(h1) == 64


def test_hash_matches_sha256_of_canonical_json():
    """
    Verifica que o hash corresponde exatamente ao SHA-256 do JSON canônico,
    inclusive para texto não-ASCII.
    """
    _require_imports()
    cfg = {"name": "ação", "debug": True, "ratio": 0.5, "database": {"max": {"connections": 10}}}
    expected = hashlib.sha256(_canonical_json_bytes(cfg)).hexdigest()
    assert compute_config_hash(cfg) == expected


def test_hash_changes_on_override():
    _require_imports()
    base = {"database": {"port": 5432}}
    changed = {"database": {"port": 5433}}
    assert compute_config_hash(base) != compute_config_hash(changed)


def test_bool_and_int_are_distinguished():
    _require_imports()
    assert compute_config_hash({"debug": True}) != compute_config_hash({"debug": 1})


@pytest.mark.parametrize("value", [[("a", 1)], "a=1", None])
def test_non_dict_is_rejected(value):
    _require_imports()
    with pytest.raises(TypeError):
        compute_config_hash(value)


def test_canonical_json_accepts_read_only_mappings():
    """Mapas imutáveis (ex.: MappingProxyType) produzem o mesmo JSON que dicts."""
    _require_imports()
    from types import MappingProxyType

    proxy = MappingProxyType({"b": MappingProxyType({"y": 1}), "a": "ç"})
    assert canonical_json(proxy) == '{"a":"ç","b":{"y":1}}'
    assert compute_config_hash(proxy) == compute_config_hash({"a": "ç", "b": {"y": 1}})


def test_non_finite_floats_are_rejected():
    _require_imports()
    with pytest.raises(ValueError):
        canonical_json({"ratio": float("nan")})
