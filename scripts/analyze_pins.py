# scripts/analyze_pins.py
# Run the PIN analysis from a shell and print the JSON the API would return.
#
#   python -m scripts.analyze_pins --township niles --year 2025 \
#       --tax-rate 10 --eq-factor 3.0163 10-10-101-010-0000 10-10-101-011-0000
#
# Exit codes: 0 ok, 1 assessor site failure, 2 bad input.

import argparse
import json
import sys

from errors import InvalidInput, UpstreamFetchFailure
from orchestrator import analyze_pins
from townships import TOWNSHIPS


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Combined assessment + tax estimate for Cook County PINs")
    p.add_argument("pins", nargs="+", help="14-digit PINs, dashed or not")
    p.add_argument("--township", required=True, choices=sorted(TOWNSHIPS))
    p.add_argument("--year", required=True)
    p.add_argument("--tax-rate", type=float, required=True, help="percent, e.g. 8.5")
    p.add_argument("--eq-factor", type=float, required=True)
    p.add_argument("--delay", type=float, default=None, help="seconds between PINs")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        result = analyze_pins(args.pins, args.township, args.year, args.tax_rate, args.eq_factor, delay=args.delay)
    except InvalidInput as e:
        print(json.dumps({"success": False, "error": e.message}), flush=True)
        return 2
    except UpstreamFetchFailure as e:
        print(json.dumps({"success": False, "error": e.message, "reason": e.reason}), flush=True)
        return 1

    print(json.dumps(result, indent=2), flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
