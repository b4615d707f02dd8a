"""Connectors — adapters de borda para APIs externas.

Estrutura:
- starling/: assinatura e contrato do webhook de feed items
"""

__all__: list[str] = []
