"""App — núcleo do serviço: pipeline de feed items, serviços e infraestrutura.

Subpastas:
- bootstrap/: composition root (settings, factories, wiring)
- use_cases/: pipeline de processamento de feed items
- services/: guard de idempotência, motor de política, dispatcher
- domain/: modelos imutáveis (evento, decisão, resultado)
- infra/: implementações concretas de IO (Starling API, stores)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs
- constants/: constantes da Starling

Padrão: app executa; api adapta; config configura; utils apoia.
"""
