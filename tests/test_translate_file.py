import importlib.util
import json
from pathlib import Path

import pytest

from conftest import EDI_850, ORDER, FakeStedi

TOOL = Path(__file__).parent.parent / "tools" / "translate_file.py"


@pytest.fixture(scope="module")
def tool():
    spec = importlib.util.spec_from_file_location("translate_file", TOOL)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def edi_file(tmp_path):
    p = tmp_path / "po.edi"
    p.write_bytes(EDI_850)
    return p


def test_prints_mapped_order(tool, edi_file, settings, capsys):
    assert tool.main([str(edi_file)], settings=settings, stedi=FakeStedi()) == 0
    assert json.loads(capsys.readouterr().out) == ORDER


def test_writes_out_file(tool, edi_file, settings, tmp_path):
    out = tmp_path / "order.json"
    assert tool.main([str(edi_file), "--out", str(out)], settings=settings, stedi=FakeStedi()) == 0
    assert json.loads(out.read_text()) == ORDER


def test_stage_failure_exits_1(tool, edi_file, settings, capsys):
    assert tool.main([str(edi_file)], settings=settings, stedi=FakeStedi(fail_on={"map"})) == 1
    assert "map failed" in capsys.readouterr().err


def test_missing_file_exits_2(tool, settings, tmp_path):
    assert tool.main([str(tmp_path / "nope.edi")], settings=settings, stedi=FakeStedi()) == 2
