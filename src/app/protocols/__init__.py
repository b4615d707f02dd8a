"""Protocolos e contratos do core da aplicação."""

from .banking import BankingClientProtocol
from .classifier import EventClassifierProtocol, EventParseError
from .dedupe import AsyncDedupeProtocol

__all__ = [
    "AsyncDedupeProtocol",
    "BankingClientProtocol",
    "EventClassifierProtocol",
    "EventParseError",
]
