import pytest

from rail_panel.model.track_segment import TrackSegment, TrackSegmentError


def test_to_dict_uses_file_field_names() -> None:
    segment = TrackSegment("straight.png", 35, 150, 2, rotation=90.0, scale_x=0.5)

    assert segment.to_dict() == {
        "imageName": "straight.png",
        "x": 35,
        "y": 150,
        "segmentNumber": 2,
        "rotation": 90.0,
        "scaleX": 0.5,
        "scaleY": 1.0,
        "width": 100.0,
        "height": 100.0,
    }


def test_from_dict_fills_optional_defaults() -> None:
    segment = TrackSegment.from_dict(
        {"imageName": "curve.png", "x": 10, "y": 20, "segmentNumber": 4}
    )

    assert segment == TrackSegment("curve.png", 10, 20, 4)
    assert segment.rotation == 0.0
    assert segment.scale_x == segment.scale_y == 1.0
    assert segment.width == segment.height == 100.0


def test_from_dict_accepts_legacy_size_keys() -> None:
    segment = TrackSegment.from_dict(
        {
            "imageName": "picture77.png",
            "x": 400,
            "y": 150,
            "segmentNumber": 1,
            "sizeWidth": 120.0,
            "sizeHeight": 80,
        }
    )

    assert segment.width == 120.0
    assert segment.height == 80.0


def test_from_dict_accepts_integer_valued_floats() -> None:
    segment = TrackSegment.from_dict(
        {"imageName": "a.png", "x": 0, "y": 0, "segmentNumber": 1, "rotation": 45}
    )

    assert segment.rotation == 45.0
    assert isinstance(segment.rotation, float)


@pytest.mark.parametrize(
    "payload",
    [
        {"x": 0, "y": 0, "segmentNumber": 1},
        {"imageName": "a.png", "y": 0, "segmentNumber": 1},
        {"imageName": "a.png", "x": 0, "y": 0},
        {"imageName": "a.png", "x": "5", "y": 0, "segmentNumber": 1},
        {"imageName": "a.png", "x": 1.5, "y": 0, "segmentNumber": 1},
        {"imageName": "a.png", "x": True, "y": 0, "segmentNumber": 1},
        {"imageName": "a.png", "x": 0, "y": 0, "segmentNumber": 1, "scaleX": "big"},
    ],
)
def test_from_dict_rejects_malformed_records(payload) -> None:
    with pytest.raises(TrackSegmentError):
        TrackSegment.from_dict(payload)


def test_from_dict_rejects_non_object() -> None:
    with pytest.raises(TrackSegmentError, match="JSON object"):
        TrackSegment.from_dict(["a.png", 0, 0, 1])


def test_describe_matches_selection_format() -> None:
    assert TrackSegment("a.png", 35, 150, 3).describe() == "Segment 3 (X: 35, Y: 150)"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), 10**400])
def test_from_dict_rejects_non_finite_numbers(value) -> None:
    with pytest.raises(TrackSegmentError):
        TrackSegment.from_dict(
            {"imageName": "a.png", "x": 0, "y": 0, "segmentNumber": 1, "rotation": value}
        )
