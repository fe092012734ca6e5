"""App: orquestração, casos de uso e infraestrutura do agente.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos de evento, entidades e documentos do artefato
- use_cases/: casos de uso (deploy, undeploy, snapshots)
- services/: síntese pura do bundle de artefatos
- infra/: implementações concretas (espelho em memória, zip)
- protocols/: contratos/interfaces
- observability/: correlation_id para logs estruturados
- constants/: constantes do formato de artefato

Padrão: app executa; api adapta; config configura; utils apoia.
"""
