# src/replay/handler.py
import logging

from botocore.exceptions import BotoCoreError, ClientError

from common.config import LOG_LEVEL, ConfigError, Settings
from common.parser import InboundEvent
from common.process import Pipeline

logger = logging.getLogger()
logger.setLevel(LOG_LEVEL)

_pipeline = None


def get_pipeline() -> Pipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = Pipeline(Settings.from_env())
    return _pipeline


def list_inbound_keys(s3, bucket: str, prefix: str, skip_prefix: str):
    """Yield every replayable key under prefix, following list_objects_v2 pagination."""
    token = None
    while True:
        kwargs = {"Bucket": bucket, "Prefix": prefix, "MaxKeys": 1000}
        if token:
            kwargs["ContinuationToken"] = token
        resp = s3.list_objects_v2(**kwargs)
        for obj in resp.get("Contents", []):
            key = obj["Key"]
            if key.endswith("/") or key.lower().endswith(".tmp"):
                continue
            if skip_prefix and key.startswith(skip_prefix):
                continue
            yield key
        if resp.get("IsTruncated"):
            token = resp.get("NextContinuationToken")
        else:
            break


def handler(event, context):
    try:
        pipeline = get_pipeline()
    except ConfigError as e:
        logger.error("Replay not configured: %s", e)
        return {"ok": False, "error": str(e)}

    settings = pipeline.settings
    event = event or {}
    bucket = event.get("bucket") or settings.inbound_bucket
    prefix = event.get("prefix", settings.inbound_prefix)
    if not bucket:
        logger.error("Replay needs a bucket (event 'bucket' or INBOUND_BUCKET)")
        return {"ok": False, "error": "no bucket given"}

    logger.info("Replaying s3://%s/%s", bucket, prefix)
    stored, failed = [], []
    try:
        for key in list_inbound_keys(pipeline.s3, bucket, prefix, settings.output_prefix):
            outcome = pipeline.run(InboundEvent(bucket=bucket, key=key))
            if outcome.ok:
                stored.append(outcome.value.key)
            else:
                failed.append({"key": key, "stage": outcome.stage, "error": outcome.error})
    except (ClientError, BotoCoreError) as e:
        # listing stopped part way; report what already ran
        logger.error("Listing s3://%s/%s failed: %s", bucket, prefix, e)
        return {"ok": False, "error": str(e), "prefix": prefix, "stored": stored, "failed": failed}

    logger.info("Replay done: %d stored, %d failed", len(stored), len(failed))
    return {
        "ok": not failed,
        "prefix": prefix,
        "count": len(stored) + len(failed),
        "stored": stored,
        "failed": failed,
    }
