# src/layered_config/sources/loader.py
"""
Loader canônico de arquivos de configuração.

Este módulo é o colaborador externo da camada FILE: lê um arquivo do
disco e o transforma em um mapa aninhado genérico, que a `FileSource`
então achata em entradas brutas. Também é usado pela ferramenta `show`
para ler arquivos de schema.

Formatos suportados:
    - YAML (.yaml, .yml)
    - JSON (.json)

Princípios fundamentais:
    - O formato é inferido pela extensão do arquivo
    - Arquivos vazios são interpretados como mapas vazios
    - Erros de leitura são fatais (não são issues agregáveis)

Limites explícitos:
    - Não achata nem resolve chaves
    - Não realiza coerção de tipos
    - Não conhece o schema
"""

from pathlib import Path
from typing import Any, Dict
import json

import yaml  # PyYAML

from layered_config.core.errors import (
    ConfigParseError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


def load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - O conteúdo raiz deve ser um dicionário (`dict`)
        - Arquivos vazios são interpretados como dicionários vazios
        - Formatos não suportados geram erro explícito

    Args:
        path (Path): Caminho para o arquivo de configuração.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo carregado como dicionário.

    Raises:
        FileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        ConfigParseError: Se o conteúdo não for YAML/JSON válido.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in {".yaml", ".yml", ".json"}:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    with path.open("r", encoding="utf-8") as f:
        try:
            if suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigParseError(f"Falha ao parsear {path}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data
