# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Layered Config.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o pacote é importável
- a API pública declarada em `__all__` existe
- o ambiente de testes (pytest) está funcional

Limites explícitos:
    - Não testar lógica de resolução
    - Não acumular asserts funcionais
"""


def test_smoke():
    """Sentinela de integridade: o pacote importa e expõe a API pública."""
    import layered_config

    for name in layered_config.__all__:
        assert hasattr(layered_config, name), name
