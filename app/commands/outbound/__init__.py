"""Outbound relay commands."""

from app.commands.outbound.send_reply_command import SendReplyCommand

__all__ = ["SendReplyCommand"]
