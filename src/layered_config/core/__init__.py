# src/layered_config/core/__init__.py
"""
Core da resolução de configuração em camadas.

Componentes principais:
    - schema     → Schema Registry (forma, tipos, defaults e restrições)
    - paths      → resolução de chave bruta para caminho canônico
    - coerce     → conversão de valor bruto para o tipo da folha
    - merge      → aplicação das camadas em ordem estrita, por folha
    - validate   → checagem pós-merge de presença, tipo e restrições
    - tree       → ConfigTree imutável entregue ao processo
    - hashing    → fingerprint canônico da configuração
    - trace      → Event Log estruturado da passada
    - errors     → taxonomia de erros (fatais e agregáveis)

Limites explícitos:
    - Não lê arquivos, ambiente ou argv (ver `layered_config.sources`)
    - Não encerra o processo
"""
