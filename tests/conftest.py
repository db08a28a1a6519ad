# tests/conftest.py
"""
Fixtures compartilhados para testes do Layered Config.

Este módulo define fixtures reutilizáveis que fornecem:
- um schema mínimo, porém representativo (folhas de topo, grupos e
  grupos aninhados, todos os tipos primitivos e restrições)
- tabelas de ambiente sintéticas
- conteúdos YAML de arquivo de configuração e de schema

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Nenhuma fixture lê `os.environ` ou o argv real do processo
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Dados retornados são determinísticos e isolados
"""

import pytest


APP_DECLARATIONS = [
    ("port", "int", 3000, ["positive"]),
    ("debug", "bool", False),
    ("name", "string", "app", ["non_empty"]),
    ("ratio", "float", 0.5, [{"min": 0}, {"max": 1}]),
    ("database.host", "string", "localhost"),
    ("database.port", "int", 5432),
    ("database.max.connections", "int", 10, ["positive"]),
    ("log.level", "string", "info", [{"choices": ["debug", "info", "warn", "error"]}]),
]


@pytest.fixture
def app_declarations() -> list:
    return list(APP_DECLARATIONS)


@pytest.fixture
def app_schema(app_declarations):
    """
    Fixture que fornece o SchemaRegistry canônico dos testes.

    Forma da árvore:

        port                      int     3000   positive
        debug                     bool    false
        name                      string  "app"  non_empty
        ratio                     float   0.5    min=0, max=1
        database.host             string  "localhost"
        database.port             int     5432
        database.max.connections  int     10     positive
        log.level                 string  "info" one_of

    Usado por:
        - Testes de resolver de caminhos, merge, validator e ConfigTree
        - Testes end-to-end de `resolve_config`
    """
    from layered_config.core.schema import SchemaRegistry

    return SchemaRegistry.from_declarations(app_declarations)


@pytest.fixture
def precedence_environ() -> dict:
    """Tabela de ambiente com a porta definida nas duas convenções, mais ruído."""
    return {
        "app.port": "5000",
        "APP_PORT": "6000",
        "PATH": "/usr/bin",
        "HOME": "/root",
        "OTHER_PORT": "1",
    }


@pytest.fixture
def config_file_yaml() -> str:
    return """\
port: 8080
database:
  port: 5433
  host: db.internal
"""


@pytest.fixture
def schema_file_yaml() -> str:
    return """\
port: {type: int, default: 3000, constraints: [positive]}
debug: {type: bool, default: false}
database:
  host: {type: string, default: localhost}
  port: {type: int, default: 5432}
  max:
    connections: {type: int, default: 10, constraints: [positive, {max: 1000}]}
"""
