"""
Spicy level state machine.

The POS and the customer modal both offer two selectors, "Medium Hot" and
"Hot", each of which can target the left half, the whole pizza, or the right
half. The per-side level is derived from the two selectors: medium is applied
first, then hot overwrites whichever side(s) it targets.

Only nine (medium, hot) combinations keep each side at a single level, and
those nine are the members of ``SpicyState``. A state where both selectors
claim the same side cannot be constructed.

Moves between states go through ``TRANSITIONS``, a table keyed by
(state, selector, target, is_large). A move is in the table when:

- the selector already targets that spot (pressing it again clears it), or
- the selector is off, the target doesn't overlap the other selector's
  side(s), and the target is the whole pizza unless the pizza is Large.

So selecting whole-pizza medium disables every hot button until medium is
cleared, a side already marked hot can only receive medium on the other
side, and non-Large pizzas only ever see "none" or "whole".
"""

import logging
from enum import Enum

from .models import SideSpicyLevel, SpicyLevel

logger = logging.getLogger(__name__)


class SpicySelector(str, Enum):
    MEDIUM = "medium"
    HOT = "hot"

    @property
    def other(self) -> "SpicySelector":
        return SpicySelector.HOT if self == SpicySelector.MEDIUM else SpicySelector.MEDIUM

    @property
    def level(self) -> SpicyLevel:
        return SpicyLevel.MEDIUM if self == SpicySelector.MEDIUM else SpicyLevel.HOT


class SpicySelection(str, Enum):
    """Where one selector is applied."""
    NONE = "none"
    LEFT = "left"
    WHOLE = "whole"
    RIGHT = "right"

    @property
    def sides(self) -> frozenset[str]:
        return _SIDES[self]


_SIDES = {
    SpicySelection.NONE: frozenset(),
    SpicySelection.LEFT: frozenset({"left"}),
    SpicySelection.RIGHT: frozenset({"right"}),
    SpicySelection.WHOLE: frozenset({"left", "right"}),
}

TARGETS = (SpicySelection.LEFT, SpicySelection.WHOLE, SpicySelection.RIGHT)


class SpicyState(str, Enum):
    """The legal (medium selector, hot selector) combinations."""
    NONE = "none"
    MEDIUM_WHOLE = "medium_whole"
    HOT_WHOLE = "hot_whole"
    MEDIUM_LEFT = "medium_left"
    MEDIUM_RIGHT = "medium_right"
    HOT_LEFT = "hot_left"
    HOT_RIGHT = "hot_right"
    MEDIUM_LEFT_HOT_RIGHT = "medium_left_hot_right"
    HOT_LEFT_MEDIUM_RIGHT = "hot_left_medium_right"

    @property
    def medium_selection(self) -> SpicySelection:
        return _SELECTIONS[self][0]

    @property
    def hot_selection(self) -> SpicySelection:
        return _SELECTIONS[self][1]

    def selection(self, selector: SpicySelector) -> SpicySelection:
        if selector == SpicySelector.MEDIUM:
            return self.medium_selection
        return self.hot_selection

    def levels(self) -> SideSpicyLevel:
        """Derive the effective level on each side."""
        per_side = {"left": SpicyLevel.NONE, "right": SpicyLevel.NONE}
        for side in self.medium_selection.sides:
            per_side[side] = SpicyLevel.MEDIUM
        for side in self.hot_selection.sides:
            per_side[side] = SpicyLevel.HOT
        return SideSpicyLevel(left=per_side["left"], right=per_side["right"])

    def is_split(self) -> bool:
        return self.levels().is_split()

    def clamp_to_whole(self) -> "SpicyState":
        """Drop half-pizza selections (used when the pizza stops being Large)."""
        keep = (SpicySelection.NONE, SpicySelection.WHOLE)
        medium = self.medium_selection if self.medium_selection in keep else SpicySelection.NONE
        hot = self.hot_selection if self.hot_selection in keep else SpicySelection.NONE
        return SpicyState.from_selections(medium, hot)

    @classmethod
    def from_selections(cls, medium: SpicySelection, hot: SpicySelection) -> "SpicyState":
        try:
            return _STATES_BY_SELECTIONS[(SpicySelection(medium), SpicySelection(hot))]
        except KeyError:
            raise ValueError(
                f"Medium selection {medium!r} and hot selection {hot!r} overlap"
            ) from None

    @classmethod
    def from_levels(cls, levels: SideSpicyLevel) -> "SpicyState":
        """Recover the selector state from a stored per-side level."""
        def _selection_for(level: SpicyLevel) -> SpicySelection:
            sides = frozenset(
                side for side, value in (("left", levels.left), ("right", levels.right))
                if value == level
            )
            for selection, selection_sides in _SIDES.items():
                if selection_sides == sides:
                    return selection
            return SpicySelection.NONE

        return cls.from_selections(_selection_for(SpicyLevel.MEDIUM), _selection_for(SpicyLevel.HOT))


_SELECTIONS = {
    SpicyState.NONE: (SpicySelection.NONE, SpicySelection.NONE),
    SpicyState.MEDIUM_WHOLE: (SpicySelection.WHOLE, SpicySelection.NONE),
    SpicyState.HOT_WHOLE: (SpicySelection.NONE, SpicySelection.WHOLE),
    SpicyState.MEDIUM_LEFT: (SpicySelection.LEFT, SpicySelection.NONE),
    SpicyState.MEDIUM_RIGHT: (SpicySelection.RIGHT, SpicySelection.NONE),
    SpicyState.HOT_LEFT: (SpicySelection.NONE, SpicySelection.LEFT),
    SpicyState.HOT_RIGHT: (SpicySelection.NONE, SpicySelection.RIGHT),
    SpicyState.MEDIUM_LEFT_HOT_RIGHT: (SpicySelection.LEFT, SpicySelection.RIGHT),
    SpicyState.HOT_LEFT_MEDIUM_RIGHT: (SpicySelection.RIGHT, SpicySelection.LEFT),
}

_STATES_BY_SELECTIONS = {selections: state for state, selections in _SELECTIONS.items()}


def _next_state(
    state: SpicyState,
    selector: SpicySelector,
    target: SpicySelection,
    is_large: bool,
) -> SpicyState | None:
    current = state.selection(selector)
    other = state.selection(selector.other)

    if current == target:
        new_selection = SpicySelection.NONE
    elif current != SpicySelection.NONE:
        return None
    elif not is_large and target != SpicySelection.WHOLE:
        return None
    elif target.sides & other.sides:
        return None
    else:
        new_selection = target

    if selector == SpicySelector.MEDIUM:
        return SpicyState.from_selections(new_selection, other)
    return SpicyState.from_selections(other, new_selection)


def _build_transition_table() -> dict[tuple[SpicyState, SpicySelector, SpicySelection, bool], SpicyState]:
    table = {}
    for is_large in (True, False):
        for state in SpicyState:
            if not is_large and state.is_split():
                continue
            for selector in SpicySelector:
                for target in TARGETS:
                    new_state = _next_state(state, selector, target, is_large)
                    if new_state is not None:
                        table[(state, selector, target, is_large)] = new_state
    return table


TRANSITIONS = _build_transition_table()


def transition(
    state: SpicyState,
    selector: SpicySelector,
    target: SpicySelection,
    is_large: bool,
) -> SpicyState | None:
    """
    Apply one button press.

    Returns:
        The new state, or None when the move is not allowed from this state.
    """
    new_state = TRANSITIONS.get((state, SpicySelector(selector), SpicySelection(target), is_large))
    if new_state is None:
        logger.debug(
            "Spicy move refused: %s -> %s %s (large=%s)",
            state.value, selector, target, is_large,
        )
    return new_state


def spicy_options(state: SpicyState, is_large: bool) -> dict[str, dict[str, bool]]:
    """
    Which spicy buttons are enabled from the current state.

    Returns:
        {"medium": {"left": bool, "whole": bool, "right": bool},
         "hot": {"left": bool, "whole": bool, "right": bool}}
    """
    return {
        selector.value: {
            target.value: (state, selector, target, is_large) in TRANSITIONS
            for target in TARGETS
        }
        for selector in SpicySelector
    }
