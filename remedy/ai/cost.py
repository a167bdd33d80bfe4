"""Cost estimation for AI fix requests."""

from __future__ import annotations

from loguru import logger

# Pricing per 1M tokens (input, output) in USD. Verify against the
# provider pricing pages before relying on these figures.
MODEL_PRICING: dict[str, tuple[float, float]] = {
    "claude-sonnet-4-6": (3.00, 15.00),
    "claude-sonnet-4-20250514": (3.00, 15.00),
    "claude-haiku-3-5-20241022": (0.80, 4.00),
    "gpt-4o": (2.50, 10.00),
    "gpt-4o-mini": (0.15, 0.60),
}

DEFAULT_PRICING: tuple[float, float] = (3.00, 15.00)


def estimate_cost(model: str, input_tokens: int, output_tokens: int) -> float:
    """Estimate the USD cost of one model call.

    Args:
        model: Model identifier.
        input_tokens: Input tokens consumed.
        output_tokens: Output tokens generated.

    Returns:
        float: Estimated cost in USD. Unknown models use default pricing.
    """
    pricing = MODEL_PRICING.get(model)
    if pricing is None:
        logger.debug(f"Unknown model {model!r}, using default pricing")
        pricing = DEFAULT_PRICING
    input_price, output_price = pricing
    return (input_tokens * input_price + output_tokens * output_price) / 1_000_000


def format_cost(cost: float) -> str:
    """Format a cost for display (e.g. ``"$0.003"`` or ``"<$0.001"``)."""
    if cost < 0.001:
        return "<$0.001"
    return f"${cost:.3f}"
