"""Normalizers — conversão de payloads externos para modelos internos.

Estrutura:
- starling/: classificador de feed items do webhook Starling
"""

from .starling import StarlingEventClassifier, classify_event

__all__ = [
    "StarlingEventClassifier",
    "classify_event",
]
