"""API — camada de borda.

Responsabilidades:
- Receber o webhook de feed items da Starling
- Validar assinatura e payload
- Normalizar dados para modelos internos

Subpastas:
- connectors/: assinatura e contrato do webhook
- normalizers/: payload externo → NotificationEvent
- routes/: endpoints HTTP (webhook, health)

NÃO PODE conter: regras de política, IO bancário, orquestração do pipeline.
"""
