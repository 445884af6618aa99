"""Destination event delivery."""

from vibepack.delivery.dispatcher import DeliveryResult, EventDispatcher

__all__ = ["DeliveryResult", "EventDispatcher"]
