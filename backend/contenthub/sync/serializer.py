import base64
import json
from datetime import datetime, timezone

from contenthub.domain.section import sections_to_json

# Fields mirrored to the repository; layout and admin-only fields stay local.
SYNC_FIELDS = ("title", "slug", "meta_title", "meta_description", "content")


def page_document(page, now=None):
    document = {field: getattr(page, field) for field in SYNC_FIELDS}
    document["sections"] = sections_to_json(page.section_list)
    document["updated_at"] = (now or datetime.now(timezone.utc)).isoformat()
    return document


def serialize_page(page, now=None) -> str:
    return json.dumps(page_document(page, now=now), indent=2, ensure_ascii=False)


def encode_content(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_content(encoded: str) -> str:
    # GitHub wraps base64 payloads at 60 columns
    return base64.b64decode("".join(encoded.split())).decode("utf-8")


def parse_document(text: str) -> dict:
    return json.loads(text)
