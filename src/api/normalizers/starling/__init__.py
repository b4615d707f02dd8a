"""Normalizer Starling — payload de webhook → NotificationEvent."""

from .classifier import StarlingEventClassifier, classify_event, map_source

__all__ = [
    "StarlingEventClassifier",
    "classify_event",
    "map_source",
]
