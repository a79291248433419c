"""Webhook relay: forwards inbound requests to targets chosen by longest path prefix."""

__version__ = "0.1.0"
