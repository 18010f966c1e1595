from .food import FOREVER, MEAL_TYPES, PROGRESSION_TYPES, TIME_PROGRESSIONS, FoodDescriptor
from .occurrence import Occurrence

__all__ = [
    "FOREVER",
    "MEAL_TYPES",
    "PROGRESSION_TYPES",
    "TIME_PROGRESSIONS",
    "FoodDescriptor",
    "Occurrence",
]
