"""fairness_audit.py
Run many commit/reveal rounds and report whether every HMAC verified and how uniform the
committed numbers were. Defaults match a throw (values 2..7).

Usage: python scripts/fairness_audit.py --rounds 100000 --lower 2 --upper 8
"""
import argparse
import json
import logging

from fair_dice.fairness.audit import run_audit


def main():
    parser = argparse.ArgumentParser(description="Audit the fair number commit-reveal protocol.")
    parser.add_argument("--rounds", type=int, default=10000)
    parser.add_argument("--lower", type=int, default=2)
    parser.add_argument("--upper", type=int, default=8)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level)

    print(f"Running {args.rounds} rounds in [{args.lower}, {args.upper})...")
    summary = run_audit(args.rounds, args.lower, args.upper)
    print(json.dumps(summary, indent=2))
    if summary["mac_failures"] or summary["out_of_range"]:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
