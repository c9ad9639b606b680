# src/series_vault/core/__init__.py
"""
Core do Series Vault.

Componentes:
    - config     → carregamento, deep-merge e hashing de configuração
    - pipeline   → protocolo de Step, RunContext e tipos de resultado
    - engine     → execução sequencial com fail-fast
    - errors     → payloads de erro serializáveis e catálogo de códigos
    - exceptions → exceções tipadas do domínio

O core não conhece séries temporais, conversores ou o store: esses
módulos dependem do core, nunca o contrário.
"""
