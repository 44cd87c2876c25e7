"""Inbound relay commands."""

from app.commands.inbound.relay_inbound_command import RelayInboundCommand

__all__ = ["RelayInboundCommand"]
