import pytest

from errors import InvalidConfiguration
from policies import Event, EventType
from utils import describe_event, get_color, parse_reference_string, speed_to_delay


def test_parse_reference_string_trims_and_skips_empty_items():
    assert parse_reference_string(" 7, 0 ,1,, 2,") == [7, 0, 1, 2]


@pytest.mark.parametrize("text", ["1,x,3", "1.5", "-1", "1 2"])
def test_parse_reference_string_rejects_bad_items(text):
    with pytest.raises(InvalidConfiguration):
        parse_reference_string(text)


def test_parse_reference_string_of_blank_text_is_empty():
    assert parse_reference_string("  ,  ") == []


def test_describe_event():
    assert describe_event(None) == "Waiting to start..."
    assert describe_event(Event.start()) == "Simulation started."
    assert describe_event(Event(EventType.HIT, page=3, frame_index=0)) == "Page 3 HIT"
    assert describe_event(Event(EventType.FAULT, page=4, frame_index=1)) == "Page 4 FAULT"
    assert describe_event(
        Event(EventType.FAULT, page=4, replaced=2, frame_index=1)
    ) == "Page 4 FAULT (Replaced 2)"
    assert describe_event(Event.done()) == "Simulation Complete!"


def test_speed_to_delay():
    assert speed_to_delay(1) == pytest.approx(1.0)
    assert speed_to_delay(10) == pytest.approx(0.1)
    assert speed_to_delay(5) == pytest.approx(0.6)
    # out of range values are clamped to the slider
    assert speed_to_delay(0) == pytest.approx(1.0)
    assert speed_to_delay(42) == pytest.approx(0.1)


def test_get_color_highlights_the_slot_of_the_last_event():
    hit = Event(EventType.HIT, page=3, frame_index=1)
    fault = Event(EventType.FAULT, page=4, replaced=2, frame_index=0)

    assert get_color(3, 1, hit) == "#dcfce7"
    assert get_color(4, 0, fault) == "#fee2e2"
    assert get_color(5, 2, fault) == "#ffffff"
    assert get_color(None, 2, fault) == "#e2e8f0"
    assert get_color(None, 0, None) == "#e2e8f0"
