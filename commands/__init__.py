"""
Slash command handlers.

Each handler is an async callable taking (request, interaction) and returning
a message payload for the follow-up edit. The registry is built once at
startup and never mutated afterwards.
"""

from transport.discord.dispatcher import CommandRegistry, build_registry

from .stats import handle_stats


def default_registry() -> CommandRegistry:
    """Registry of every command this application serves."""
    return build_registry({
        "stats": handle_stats,
    })


__all__ = ["default_registry", "handle_stats"]
