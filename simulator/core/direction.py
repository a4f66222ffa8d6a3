"""
Direction vocabulary shared by cars, hall buttons and the group control
system. Plain strings, as they travel inside broker messages.
"""

UP = "UP"
DOWN = "DOWN"
IDLE = "IDLE"  # car direction only: no momentum

CALL_DIRECTIONS = (UP, DOWN)

ARROWS = {UP: "▲", DOWN: "▼"}


def format_floor(floor: int) -> str:
    """Display label of a floor: ground floor is 'G'."""
    return "G" if floor == 0 else str(floor)
