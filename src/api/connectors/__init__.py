"""Connectors: adapters de borda para APIs externas.

Estrutura:
- apim/: Publisher API (import/undeploy) e internal data API (snapshots)
"""

__all__: list[str] = []
