# common/config.py
import os
from dataclasses import dataclass
from typing import Optional

TRANSLATE_URL = "https://edi-core.stedi.com/2021-06-05/translate"
MAPPINGS_URL = "https://mappings.stedi.com/2021-06-01/mappings"


class ConfigError(RuntimeError):
    pass


def _get_required(env, name: str) -> str:
    value = (env.get(name) or "").strip()
    if not value:
        raise ConfigError(f"Missing required environment variable {name}")
    return value


def _get_float(env, name: str, default: str) -> float:
    raw = env.get(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    api_key: str
    mapping_id: str
    translate_url: str = TRANSLATE_URL
    mappings_url: str = MAPPINGS_URL
    output_format: str = "jedi@2.0-beta"
    output_prefix: str = "orders/"
    order_number_field: str = "po_number"
    input_encoding: str = "ascii"
    http_timeout: float = 30.0
    inbound_bucket: Optional[str] = None
    inbound_prefix: str = "inbound/"
    region: str = "us-east-1"

    @classmethod
    def from_env(cls, env=None) -> "Settings":
        """Build settings from environment variables (``os.environ`` by default).

        STEDI_API_KEY and STEDI_MAPPING_ID are required; everything else has a default.
        """
        env = os.environ if env is None else env
        return cls(
            api_key=_get_required(env, "STEDI_API_KEY"),
            mapping_id=_get_required(env, "STEDI_MAPPING_ID"),
            translate_url=env.get("STEDI_TRANSLATE_URL", TRANSLATE_URL),
            mappings_url=env.get("STEDI_MAPPINGS_URL", MAPPINGS_URL).rstrip("/"),
            output_format=env.get("OUTPUT_FORMAT", "jedi@2.0-beta"),
            output_prefix=env.get("OUTPUT_PREFIX", "orders/"),
            order_number_field=env.get("ORDER_NUMBER_FIELD", "po_number"),
            input_encoding=env.get("INPUT_ENCODING", "ascii"),
            http_timeout=_get_float(env, "HTTP_TIMEOUT", "30"),
            inbound_bucket=env.get("INBOUND_BUCKET") or None,
            inbound_prefix=env.get("INBOUND_PREFIX", "inbound/"),
            region=env.get("AWS_REGION", "us-east-1"),
        )


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
