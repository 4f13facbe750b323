# src/common/stedi_client.py
import json
import logging

import requests

from .config import Settings

logger = logging.getLogger(__name__)


class StediError(RuntimeError):
    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class StediClient:
    """Calls the Stedi /translate and /map endpoints with one shared session."""

    def __init__(self, settings: Settings, session=None):
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Key {settings.api_key}",
            "Content-Type": "application/json",
        })

    def _post(self, name: str, url: str, payload) -> dict:
        try:
            resp = self.session.post(url, json=payload, timeout=self.settings.http_timeout)
        except requests.exceptions.Timeout as e:
            raise StediError(f"{name} timed out after {self.settings.http_timeout}s (url='{url}')") from e
        except requests.exceptions.RequestException as e:
            raise StediError(f"{name} request failed (url='{url}'): {e}") from e

        if not 200 <= resp.status_code < 300:
            raise StediError(f"{name} failed: {resp.status_code} - {resp.text}", status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise StediError(f"{name} returned a non-JSON body", status_code=resp.status_code) from e

        logger.info("%s RESP %s", name, json.dumps(data, indent=2))
        return data

    def translate(self, edi_text: str) -> dict:
        """EDI text -> JEDI document."""
        body = {
            "input_format": "edi",
            "input": edi_text,
            "output_format": self.settings.output_format,
        }
        return self._post("/translate", self.settings.translate_url, body)

    def map(self, jedi: dict) -> dict:
        """JEDI document -> target schema document, using the configured mapping."""
        mapping_id = (self.settings.mapping_id or "").strip()
        if not mapping_id:
            raise StediError("No mapping id configured")
        url = f"{self.settings.mappings_url}/{mapping_id}/map"
        return self._post("/map", url, jedi)
