from rail_panel.model.segment_store import TrackSegmentStore
from rail_panel.model.track_segment import TrackSegment


def _make_segment(number: int, x: int = 0, y: int = 0) -> TrackSegment:
    return TrackSegment(f"track{number}.png", x, y, number)


def test_next_segment_number_starts_at_one() -> None:
    assert TrackSegmentStore().next_segment_number() == 1


def test_next_segment_number_follows_maximum() -> None:
    store = TrackSegmentStore([_make_segment(3), _make_segment(1), _make_segment(7)])

    assert store.next_segment_number() == 8


def test_add_appends_in_insertion_order() -> None:
    store = TrackSegmentStore([_make_segment(1)])
    segment = _make_segment(2, x=35)

    store.add(segment)

    assert len(store) == 2
    assert segment in store
    assert store.segments[-1] == segment


def test_delete_missing_number_is_noop() -> None:
    segments = [_make_segment(1), _make_segment(2)]
    store = TrackSegmentStore(segments)

    removed = store.delete(9)

    assert removed == 0
    assert list(store) == segments


def test_delete_removes_matching_segment() -> None:
    store = TrackSegmentStore([_make_segment(1), _make_segment(2), _make_segment(3)])

    removed = store.delete(2)

    assert removed == 1
    assert len(store) == 2
    assert all(s.segment_number != 2 for s in store)
    assert [s.segment_number for s in store] == [1, 3]


def test_gap_is_not_refilled_but_maximum_is_reused() -> None:
    store = TrackSegmentStore([_make_segment(1), _make_segment(2), _make_segment(3)])

    store.delete(2)
    assert store.next_segment_number() == 4

    store.delete(3)
    assert store.next_segment_number() == 2


def test_find_and_replace_all() -> None:
    store = TrackSegmentStore([_make_segment(1)])

    store.replace_all([_make_segment(5), _make_segment(6)])

    assert store.find(1) is None
    assert store.find(6) == _make_segment(6)


def test_segments_snapshot_is_detached_from_store() -> None:
    store = TrackSegmentStore([_make_segment(1)])
    snapshot = store.segments

    store.add(_make_segment(2))

    assert len(snapshot) == 1
