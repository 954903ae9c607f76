"""Selection and prev/next navigation over the popup ring.

States are ``Idle`` (nothing selected) and ``Selected(item)``. Each
function takes the current ``SelectionState`` plus the *current*
``TimelineLayout`` and returns a new state; nothing is mutated. The
selected item is always looked up again by identity before use, so a
selection that vanished from the layout degrades to ``Idle``.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from daywheel.config import ROTARY_STEP_THRESHOLD
from daywheel.models.layout import PopupItem, SelectionState, TimelineLayout

logger = logging.getLogger(__name__)

IDLE = SelectionState()


@dataclass(frozen=True)
class Tap:
    """Pointer-up on the dial; ``item`` is what hit testing returned, if anything."""
    item: Optional[PopupItem]


@dataclass(frozen=True)
class Rotary:
    """Rotary encoder / scroll delta. Positive steps forward (clockwise)."""
    delta: float


Interaction = Union[Tap, Rotary]


def build_popup_ring(layout: TimelineLayout) -> List[PopupItem]:
    """All selectable items sorted by angle; events precede tasks on ties."""
    items = [PopupItem.of_event(e) for e in layout.events]
    items.extend(PopupItem.of_task(t) for t in layout.tasks)
    return sorted(items, key=lambda item: item.angle)


def _index_in_ring(ring: List[PopupItem], item: Optional[PopupItem]) -> int:
    if item is None:
        return -1
    key = item.identity
    return next((idx for idx, candidate in enumerate(ring) if candidate.identity == key), -1)


def resolve_selection(state: SelectionState, layout: TimelineLayout) -> SelectionState:
    """Re-bind the selection to the item in ``layout``, or drop to Idle."""
    if state.selected is None:
        return IDLE if state.accumulated_rotary_delta else state
    ring = build_popup_ring(layout)
    idx = _index_in_ring(ring, state.selected)
    if idx < 0:
        logger.debug(f"Selection {state.selected.identity} no longer in layout, clearing")
        return IDLE
    if ring[idx] == state.selected:
        return state
    return SelectionState(selected=ring[idx], accumulated_rotary_delta=state.accumulated_rotary_delta)


def on_tap(state: SelectionState, layout: TimelineLayout, item: Optional[PopupItem]) -> SelectionState:
    """Tap toggles the hit item; a tap that hit nothing clears the selection."""
    if item is None:
        return IDLE
    ring = build_popup_ring(layout)
    idx = _index_in_ring(ring, item)
    if idx < 0:
        return IDLE
    current = resolve_selection(state, layout).selected
    if current is not None and current.identity == item.identity:
        logger.debug(f"Tap on selected {item.title!r}, deselecting")
        return IDLE
    logger.debug(f"Tap selected {item.title!r}")
    return SelectionState(selected=ring[idx])


def on_rotary(
    state: SelectionState,
    layout: TimelineLayout,
    delta: float,
    threshold: float = ROTARY_STEP_THRESHOLD,
) -> SelectionState:
    """Accumulate rotary delta and step through the ring once it crosses the threshold."""
    state = resolve_selection(state, layout)
    if state.selected is None:
        return IDLE
    ring = build_popup_ring(layout)
    idx = _index_in_ring(ring, state.selected)
    if not ring or idx < 0:
        return IDLE

    accumulated = state.accumulated_rotary_delta + delta
    if accumulated >= threshold:
        new_idx = (idx + 1) % len(ring)
    elif accumulated <= -threshold:
        new_idx = (idx - 1) % len(ring)
    else:
        return SelectionState(selected=state.selected, accumulated_rotary_delta=accumulated)

    logger.debug(f"Rotary step {'next' if accumulated > 0 else 'prev'} -> idx={new_idx}")
    return SelectionState(selected=ring[new_idx])


def apply_interaction(state: SelectionState, layout: TimelineLayout, interaction: Interaction) -> SelectionState:
    if isinstance(interaction, Tap):
        return on_tap(state, layout, interaction.item)
    if isinstance(interaction, Rotary):
        return on_rotary(state, layout, interaction.delta)
    raise TypeError(f"Unknown interaction: {interaction!r}")
