"""API: camada de borda do agente.

Responsabilidades:
- Receber eventos e snapshots do adapter do gateway (routes/)
- Chamar as APIs REST do API Manager (connectors/)

Subpastas:
- connectors/: clientes HTTP do control plane
- routes/: endpoints HTTP (eventos de API, entidades, health)

NÃO PODE conter: síntese de artefatos ou regras de domínio.
"""
