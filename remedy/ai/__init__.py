"""AI-assisted fix generation for remedy.

The AI path is optional and only used when no deterministic template
could fix an error. Requires installation with AI extras:

    pip install 'remedy[ai]'

Features:
    - Structured prompts built from the error and its file context
    - Per-call timeout with bounded, linearly backed-off retries
    - Validation of model responses with confidence clamping
"""

from remedy.ai.availability import is_ai_available, require_ai
from remedy.ai.config import AIConfig
from remedy.ai.fix import AIFixGenerator

__all__ = [
    "AIConfig",
    "AIFixGenerator",
    "is_ai_available",
    "require_ai",
]
