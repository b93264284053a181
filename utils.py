# utils.py

from typing import List, Optional

from errors import InvalidConfiguration
from policies import Event, EventType


def parse_reference_string(text: str) -> List[int]:
    """
    Turn "7, 0, 1,2" into [7, 0, 1, 2].

    Empty items are skipped. Anything that is not a non-negative integer
    raises InvalidConfiguration.
    """
    pages = []
    for item in text.split(','):
        item = item.strip()
        if item == '':
            continue
        try:
            page = int(item)
        except ValueError:
            raise InvalidConfiguration(f"Not a page number: {item!r}") from None
        if page < 0:
            raise InvalidConfiguration(f"Page numbers must be non-negative, got {page}")
        pages.append(page)
    return pages


def describe_event(event: Optional[Event]) -> str:
    """Status line shown next to the visualization."""
    if event is None:
        return "Waiting to start..."
    if event.type is EventType.START:
        return "Simulation started."
    if event.type is EventType.HIT:
        return f"Page {event.page} HIT"
    if event.type is EventType.FAULT:
        if event.replaced is None:
            return f"Page {event.page} FAULT"
        return f"Page {event.page} FAULT (Replaced {event.replaced})"
    return "Simulation Complete!"


def speed_to_delay(speed: int) -> float:
    """Slider value 1 (slow) .. 10 (fast) to seconds between steps."""
    speed = max(1, min(10, int(speed)))
    return (1100 - speed * 100) / 1000.0


def get_color(page: Optional[int], index: int, event: Optional[Event]) -> str:
    """Return a fill color for a frame slot."""
    if event is not None and event.frame_index == index:
        if event.type is EventType.HIT:
            return "#dcfce7"  # green
        if event.type is EventType.FAULT:
            return "#fee2e2"  # red
    if page is None:
        return "#e2e8f0"  # light grey
    return "#ffffff"
