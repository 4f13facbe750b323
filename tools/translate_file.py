#!/usr/bin/env python3
# tools/translate_file.py
import argparse, json, logging, sys
from pathlib import Path


# --- add repo paths so imports work regardless of CWD ---
ROOT = Path(__file__).resolve().parent.parent  # repo root
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))     # enables `from common ...`

from common.config import ConfigError, Settings
from common.process import Pipeline


def main(argv=None, settings=None, stedi=None) -> int:
    ap = argparse.ArgumentParser(description="Translate + map a local EDI file through Stedi (no S3).")
    ap.add_argument("edi_file", help="path to an X12 EDI file")
    ap.add_argument("--out", help="write the mapped JSON here instead of stdout")
    args = ap.parse_args(argv)

    path = Path(args.edi_file)
    if not path.is_file():
        print(f"No such file: {path}", file=sys.stderr)
        return 2

    if settings is None:
        try:
            settings = Settings.from_env()
        except ConfigError as e:
            print(str(e), file=sys.stderr)
            return 2

    # convert() runs translate + map only, so no S3 client is ever created
    pipeline = Pipeline(settings, stedi=stedi)
    outcome = pipeline.convert(path.read_bytes())
    if not outcome.ok:
        print(f"{outcome.stage} failed: {outcome.error}", file=sys.stderr)
        return 1

    text = json.dumps(outcome.value, indent=2)
    if args.out:
        Path(args.out).write_text(text + "\n", encoding="utf-8")
        print(f"Wrote {args.out}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    sys.exit(main())
