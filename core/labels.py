"""
core/labels.py
────────────────────────────────────────────────────────────────────────
Short human-readable labels for the enum-ish food fields.
"""

from __future__ import annotations

from core.models import FOREVER, FoodDescriptor

PROGRESSION_LABELS = {
    "static": "Same amount",
    "buildup": "Build up gradually",
    "reduction": "Reduce gradually",
    "custom": "Custom (plateau at halfway)",
}

TIME_PROGRESSION_LABELS = {
    "static": "Same time",
    "later": "Later each day",
    "earlier": "Earlier each day",
}

MEAL_TYPE_LABELS = {
    "breakfast": "Breakfast",
    "lunch": "Lunch",
    "dinner": "Dinner",
    "snack": "Snack",
    "any": "Any time",
}


def duration_label(days: int | None) -> str | None:
    if not days:
        return None
    if days >= FOREVER:
        return "forever"
    if days == 1:
        return "1 day"
    return f"{days} days"


def describe_amount(food: FoodDescriptor) -> str | None:
    """e.g. "1 teaspoon → 3 teaspoon, build up gradually over 14 days"."""
    if not food.starting_amount:
        return None
    kind = food.progression_type or "static"
    if kind == "static" or not food.target_amount:
        return food.starting_amount
    text = f"{food.starting_amount} → {food.target_amount}, {PROGRESSION_LABELS.get(kind, kind).lower()}"
    span = duration_label(food.progression_duration)
    if span == "forever":
        return f"{text}, no end date"
    if span:
        return f"{text} over {span}"
    return text


def describe_time(food: FoodDescriptor) -> str | None:
    if not food.start_time:
        return None
    kind = food.time_progression or "static"
    if kind not in ("later", "earlier") or not food.time_progression_amount:
        return f"at {food.start_time}"
    label = TIME_PROGRESSION_LABELS[kind].lower()
    return f"from {food.start_time}, {label} by {food.time_progression_amount} min"
