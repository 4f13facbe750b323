# src/common/parser.py
import urllib.parse
from dataclasses import dataclass


class EventError(ValueError):
    pass


@dataclass(frozen=True)
class InboundEvent:
    bucket: str
    key: str


def _record_to_event(rec: dict) -> InboundEvent:
    s3 = rec.get("s3") or {}
    bucket = (s3.get("bucket") or {}).get("name")
    raw_key = (s3.get("object") or {}).get("key")
    if not bucket or not raw_key:
        raise EventError("S3 record is missing bucket name or object key")
    # S3 notifications encode spaces as '+' and percent-encode the rest
    return InboundEvent(bucket=bucket, key=urllib.parse.unquote_plus(raw_key))


def parse_s3_event(event: dict) -> list:
    records = (event or {}).get("Records") or []
    if not records:
        raise EventError("Event has no Records")
    return [_record_to_event(rec) for rec in records]
