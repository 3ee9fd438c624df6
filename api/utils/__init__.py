"""Utility modules."""
from api.utils.validation import validate_file_name

__all__ = ["validate_file_name"]
