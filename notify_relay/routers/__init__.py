from notify_relay.routers import actions, control, decisions, health, sessions

__all__ = [
    "health",
    "sessions",
    "actions",
    "control",
    "decisions",
]
