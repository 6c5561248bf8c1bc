"""Path and question loaders."""

from .loaders import load_path, load_questions

__all__ = ["load_path", "load_questions"]
