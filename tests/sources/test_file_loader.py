# tests/sources/test_file_loader.py
"""
Testes do loader de arquivos de configuração (load_file).

Os testes asseguram que:
- YAML e JSON são carregados como dicionários
- arquivos vazios viram dicionários vazios
- formatos não suportados, conteúdo inválido e raiz não-dict são rejeitados
  com exceções tipadas
- arquivo inexistente propaga FileNotFoundError

Decisões arquiteturais:
    - Erros do loader são fatais, e não issues agregáveis
"""

import json
from pathlib import Path

import pytest

try:
    from layered_config.sources.loader import load_file
    from layered_config.core.errors import (
        ConfigParseError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_file = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/layered_config/sources/loader.py (load_file)\n"
            "- src/layered_config/core/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_load_yaml(tmp_path: Path, config_file_yaml):
    _require_imports()
    path = tmp_path / "app.yml"
    path.write_text(config_file_yaml, encoding="utf-8")
    out = load_file(path)
    assert out == {"port": 8080, "database": {"port": 5433, "host": "db.internal"}}


def test_load_json(tmp_path: Path):
    _require_imports()
    path = tmp_path / "app.json"
    path.write_text(json.dumps({"debug": True, "ratio": 0.75}), encoding="utf-8")
    assert load_file(path) == {"debug": True, "ratio": 0.75}


def test_empty_yaml_is_empty_dict(tmp_path: Path):
    _require_imports()
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_file(path) == {}


def test_invalid_root_type_raises(tmp_path: Path):
    _require_imports()
    path = tmp_path / "list.yaml"
    path.write_text("- just\n- a\n- list\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_file(path)


def test_unsupported_extension_raises(tmp_path: Path):
    _require_imports()
    path = tmp_path / "app.toml"
    path.write_text("port = 1\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_file(path)


@pytest.mark.parametrize("name, content", [("bad.yaml", "port: [1, 2\n"), ("bad.json", "{port: 1}")])
def test_parse_errors_are_typed(tmp_path: Path, name, content):
    _require_imports()
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_file(path)


def test_missing_file_raises(tmp_path: Path):
    _require_imports()
    with pytest.raises(FileNotFoundError):
        load_file(tmp_path / "absent.yaml")
