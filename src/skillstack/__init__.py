"""
SkillStack - Skill catalog search

Client-side full-text search over a published snapshot of skills for AI
coding assistants, with lazy index loading and debounced querying.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("skillstack")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "__version__",
]
