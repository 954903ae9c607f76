from typing import List, Sequence

from daywheel.models.layout import LayeredInterval, TimeInterval


def assign_layers(intervals: Sequence[TimeInterval]) -> List[LayeredInterval]:
    """Greedy first-fit layering of overlapping intervals.

    Intervals are visited by start time (stable, so ties keep input order)
    and each takes the lowest layer whose previous occupant has ended.
    """
    layer_ends: List[int] = []
    result: List[LayeredInterval] = []
    for interval in sorted(intervals, key=lambda i: i.start_minutes):
        layer = next(
            (idx for idx, end in enumerate(layer_ends) if interval.start_minutes >= end),
            None,
        )
        if layer is None:
            layer_ends.append(interval.end_minutes)
            layer = len(layer_ends) - 1
        else:
            layer_ends[layer] = interval.end_minutes
        result.append(LayeredInterval(interval=interval, layer_index=layer))
    return result


def back_to_back_markers(intervals: Sequence[TimeInterval], tolerance_minutes: int) -> List[int]:
    """Start minute of every interval that begins within tolerance of the previous one's end.

    Pairs are taken in start order; chains of three or more produce one
    marker per link and are not deduplicated.
    """
    if len(intervals) < 2:
        return []
    ordered = sorted(intervals, key=lambda i: i.start_minutes)
    markers: List[int] = []
    for current, following in zip(ordered, ordered[1:]):
        if abs(following.start_minutes - current.end_minutes) <= tolerance_minutes:
            markers.append(following.start_minutes)
    return markers
