from datetime import datetime, timezone

from src.config import FieldMap
from src.models import VideoRecord
from src.transform.webflow_item import MAX_DESCRIPTION_LENGTH, build_payload, normalize_description


def _record(**overrides):
    data = dict(
        video_id="abc123",
        title="Demo",
        canonical_url="https://www.youtube.com/watch?v=abc123",
        published_at=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
        description="",
        thumbnail_url="https://i.ytimg.com/vi/abc123/hqdefault.jpg",
    )
    data.update(overrides)
    return VideoRecord(**data)


def test_description_is_collapsed_to_one_line():
    assert normalize_description("Line one\nLine two   three") == "Line one Line two three"
    assert normalize_description("  \r\n\ttabs\tand\r\nbreaks \n") == "tabs and breaks"


def test_description_is_truncated():
    result = normalize_description("x" * (MAX_DESCRIPTION_LENGTH + 50))
    assert len(result) == MAX_DESCRIPTION_LENGTH


def test_description_normalization_is_idempotent():
    samples = [
        "",
        "Line one\nLine two   three",
        "word " * 400,
        "a" * 999 + " b" + "c" * 20,
        "\n\n  leading and trailing  \n",
    ]
    for text in samples:
        once = normalize_description(text)
        assert normalize_description(once) == once
        assert len(once) <= MAX_DESCRIPTION_LENGTH


def test_payload_shape():
    record = _record(description="Line one\nLine two")
    payload = build_payload(record, FieldMap()).model_dump()

    assert payload == {
        "isDraft": False,
        "isArchived": False,
        "fieldData": {
            "name": "Demo",
            "slug": "yt-abc123",
            "video-url": "https://www.youtube.com/watch?v=abc123",
            "description-2": "Line one Line two",
            "published-date": "2024-01-01T10:00:00.000Z",
            "thumbnail-image": {
                "url": "https://i.ytimg.com/vi/abc123/hqdefault.jpg",
                "alt": "Demo",
            },
        },
    }


def test_payload_uses_configured_field_slugs():
    fields = FieldMap(video_url="youtube-link", description="summary", published="date", thumbnail="cover")
    field_data = build_payload(_record(), fields).fieldData

    assert set(field_data) == {"name", "slug", "youtube-link", "summary", "date", "cover"}
