"""ax - install agent bundles into Claude Code, Cursor, and Codex."""

__version__ = "1.2.1"
