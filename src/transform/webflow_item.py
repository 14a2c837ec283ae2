import re
from ..config import FieldMap
from ..models import CmsItemPayload, ImageRef, VideoRecord

MAX_DESCRIPTION_LENGTH = 1000

_WHITESPACE_RE = re.compile(r"\s+")

def normalize_description(text: str, max_length: int = MAX_DESCRIPTION_LENGTH) -> str:
    """Single line, trimmed, at most max_length characters (PlainText field limit)."""
    text = _WHITESPACE_RE.sub(" ", text or "").strip()
    if len(text) > max_length:
        # no trailing space after the cut
        text = text[:max_length].rstrip()
    return text

def build_payload(record: VideoRecord, fields: FieldMap) -> CmsItemPayload:
    return CmsItemPayload(
        isDraft=False,
        isArchived=False,
        fieldData={
            # Built-ins
            "name": record.title,
            "slug": record.slug,

            fields.video_url: record.canonical_url,
            fields.description: normalize_description(record.description),
            fields.published: record.published_iso,
            fields.thumbnail: ImageRef(url=record.thumbnail_url, alt=record.title).model_dump(),
        },
    )
