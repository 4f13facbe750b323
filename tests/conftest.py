"""Pytest configuration for test suite."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Lambda layout: handlers import `common.*` with src/ as the root
ROOT_DIR = Path(__file__).parent.parent
SRC_DIR = ROOT_DIR / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from common.config import Settings  # noqa: E402
from common.process import Pipeline  # noqa: E402
from common.stedi_client import StediError  # noqa: E402

EDI_850 = b"ISA*00*          *00*          *ZZ*ANOTHERMERCH   *14*THISISME       *220906*1200*U*00401*000000001*0*T*>~ST*850*0001~BEG*00*DS*365465413**20220830~SE*3*0001~IEA*1*000000001~"
JEDI = {"interchanges": [{"groups": [{"transaction_sets": [{"heading": {"beginning_segment_for_purchase_order_BEG": {"purchase_order_number_03": "365465413"}}}]}]}]}
ORDER = {"po_number": "365465413", "order_date": "2022-08-30", "lines": []}


class FakeStedi:
    """Records calls; raises StediError for any stage named in fail_on."""

    def __init__(self, jedi=None, order=None, fail_on=()):
        self.jedi = JEDI if jedi is None else jedi
        self.order = ORDER if order is None else order
        self.fail_on = set(fail_on)
        self.calls = []

    def translate(self, edi_text):
        self.calls.append(("translate", edi_text))
        if "translate" in self.fail_on:
            raise StediError("/translate failed: 400 - bad EDI", status_code=400)
        return self.jedi

    def map(self, jedi):
        self.calls.append(("map", jedi))
        if "map" in self.fail_on:
            raise StediError("/map failed: 404 - mapping not found", status_code=404)
        return self.order


def s3_with_object(body: bytes = EDI_850) -> MagicMock:
    s3 = MagicMock()
    s3.get_object.return_value = {"Body": MagicMock(read=MagicMock(return_value=body))}
    return s3


def s3_event(bucket="edi-inbound", key="inbound/po+850.edi") -> dict:
    return {"Records": [{"s3": {"bucket": {"name": bucket}, "object": {"key": key}}}]}


@pytest.fixture
def settings():
    return Settings(api_key="test-key", mapping_id="01GCH3MAP")


@pytest.fixture
def stedi():
    return FakeStedi()


@pytest.fixture
def s3():
    return s3_with_object()


@pytest.fixture
def pipeline(settings, s3, stedi):
    return Pipeline(settings, s3=s3, stedi=stedi)
