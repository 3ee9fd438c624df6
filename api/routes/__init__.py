"""API route modules."""
from api.routes import markdown, questions, sync, tags

__all__ = ["markdown", "questions", "sync", "tags"]
