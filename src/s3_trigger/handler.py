# src/s3_trigger/handler.py
import json
import logging

from common.config import LOG_LEVEL, ConfigError, Settings
from common.parser import EventError, parse_s3_event
from common.process import Pipeline

logger = logging.getLogger()
logger.setLevel(LOG_LEVEL)

# built on first invocation, reused while the Lambda container is warm
_pipeline = None


def get_pipeline() -> Pipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = Pipeline(Settings.from_env())
    return _pipeline


def _response(status: int, message: str, results: list) -> dict:
    return {
        "statusCode": status,
        "body": json.dumps({"message": message, "result": results}),
    }


def handler(event, context):
    logger.info("Event: %s", json.dumps(event))

    try:
        pipeline = get_pipeline()
        inbound = parse_s3_event(event)
    except (ConfigError, EventError) as e:
        logger.error("Rejected event: %s", e)
        return _response(500, str(e), [])

    results, failed = [], 0
    try:
        for ev in inbound:
            # stored orders land in the same bucket; don't feed them back in
            if ev.key.startswith(pipeline.settings.output_prefix):
                logger.info("Skipping s3://%s/%s (output prefix)", ev.bucket, ev.key)
                continue
            outcome = pipeline.run(ev)
            if outcome.ok:
                results.append(outcome.value.to_dict())
            else:
                failed += 1
                results.append({"source_key": ev.key, "stage": outcome.stage, "error": outcome.error})
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=True)
        return _response(500, str(e), results)

    if failed:
        return _response(500, f"EDI transformation failed for {failed} of {len(results)} object(s)", results)
    return _response(200, "EDI transformation succeeded", results)
