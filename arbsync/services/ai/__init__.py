"""
AI services - DSPy language model configuration.

The translation backend in arbsync.backends.llm configures its model
through here.
"""

from arbsync.services.ai.client import configure_lm, get_lm

__all__ = [
    "configure_lm",
    "get_lm",
]
