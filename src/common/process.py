# src/common/process.py
import json
import logging
import random
from dataclasses import dataclass

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .config import Settings
from .parser import InboundEvent
from .result import Result
from .stedi_client import StediClient, StediError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredArtifact:
    bucket: str
    key: str

    @property
    def url(self) -> str:
        return f"https://{self.bucket}.s3.amazonaws.com/{self.key}"

    def to_dict(self) -> dict:
        return {"bucket": self.bucket, "key": self.key, "url": self.url}


def order_key_for(order: dict, prefix: str = "orders/", field: str = "po_number") -> str:
    number = order.get(field) if isinstance(order, dict) else None
    if number is None or str(number).strip() == "":
        raise KeyError(f"mapped document has no '{field}'")
    # random suffix lowers the chance of overwriting, it does not prevent it
    return f"{prefix}{number}-{random.randint(0, 99)}.json"


class Pipeline:
    """Fetch -> translate -> map -> store for a single S3 object.

    Every stage returns a Result; the first failure is returned as-is and
    nothing after it runs.
    """

    def __init__(self, settings: Settings, s3=None, stedi=None):
        self.settings = settings
        self._s3 = s3
        self.stedi = stedi if stedi is not None else StediClient(settings)

    @property
    def s3(self):
        # created on first use; translate/map-only callers never build one
        if self._s3 is None:
            self._s3 = boto3.client("s3", region_name=self.settings.region)
        return self._s3

    # 1) S3 -> raw bytes
    def fetch(self, event: InboundEvent) -> Result:
        try:
            obj = self.s3.get_object(Bucket=event.bucket, Key=event.key)
            return Result.success(obj["Body"].read())
        except (ClientError, BotoCoreError) as e:
            logger.error("fetch failed for s3://%s/%s: %s", event.bucket, event.key, e)
            return Result.failure("fetch", f"Could not read s3://{event.bucket}/{event.key}: {e}")

    # 2) EDI -> JEDI
    def translate(self, raw: bytes) -> Result:
        try:
            text = raw.decode(self.settings.input_encoding) if isinstance(raw, bytes) else raw
            return Result.success(self.stedi.translate(text))
        except UnicodeDecodeError as e:
            logger.error("translate failed: payload is not %s: %s", self.settings.input_encoding, e)
            return Result.failure("translate", f"Payload is not valid {self.settings.input_encoding}: {e}")
        except StediError as e:
            logger.error("translate failed: %s", e)
            return Result.failure("translate", str(e))

    # 3) JEDI -> purchase order
    def map(self, jedi: dict) -> Result:
        try:
            return Result.success(self.stedi.map(jedi))
        except StediError as e:
            logger.error("map failed (mapping_id=%r): %s", self.settings.mapping_id, e)
            return Result.failure("map", str(e))

    # 4) purchase order -> S3
    def store(self, bucket: str, order: dict) -> Result:
        try:
            key = order_key_for(order, self.settings.output_prefix, self.settings.order_number_field)
        except KeyError as e:
            logger.error("store failed: %s", e.args[0])
            return Result.failure("store", e.args[0])

        try:
            self.s3.put_object(
                Bucket=bucket,
                Key=key,
                Body=json.dumps(order, indent=2).encode("utf-8"),
                ContentType="application/json",
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("store failed for s3://%s/%s: %s", bucket, key, e)
            return Result.failure("store", f"Could not write s3://{bucket}/{key}: {e}")

        artifact = StoredArtifact(bucket, key)
        logger.info("File uploaded successfully at %s", artifact.url)
        return Result.success(artifact)

    def convert(self, raw: bytes) -> Result:
        """Translate + map only; used where there is no S3 object to fetch or store."""
        translated = self.translate(raw)
        if not translated.ok:
            return translated
        return self.map(translated.value)

    def run(self, event: InboundEvent) -> Result:
        fetched = self.fetch(event)
        if not fetched.ok:
            return fetched

        mapped = self.convert(fetched.value)
        if not mapped.ok:
            return mapped

        return self.store(event.bucket, mapped.value)
