"""Use cases do webhook de feed item."""

from .process_feed_item import ProcessFeedItemUseCase

__all__ = ["ProcessFeedItemUseCase"]
