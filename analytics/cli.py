from __future__ import annotations

import argparse
import json
import logging
import os
from typing import Any, Optional

from dotenv import load_dotenv

from .compatibility import compute_compatibility_score
from .config import riot_config_from_env
from .render import render_compatibility_text, render_text
from .report import build_report
from .riot_ingest import FetchMeta, bundle_from_json, bundle_to_json, fetch_player_data


def _write_json(path: str, obj: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2)


def _read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _emit(text: str, output: Optional[str]) -> None:
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        print(text)


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="League of Legends player analytics")
    parser.add_argument("--debug", action="store_true", help="Print debug logs")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Compute a player's analytics snapshot")
    who = analyze.add_mutually_exclusive_group()
    who.add_argument("--puuid", default=None, help="Player puuid")
    who.add_argument("--riot-id", default=None, help="Player Riot id, GameName#TAG")
    analyze.add_argument("--count", type=int, default=None, help="Number of recent matches to fetch")
    analyze.add_argument("--rank-tier", default=None, help="Override the rank tier used for benchmarks")
    analyze.add_argument("--from-raw", default=None, help="Load a saved raw bundle instead of querying Riot")
    analyze.add_argument("--save-raw", default=None, help="Path to save the raw bundle JSON")
    analyze.add_argument("--output", default=None, help="Path to output report JSON/text")
    analyze.add_argument(
        "--output-format", choices=["json", "text"], default="json", help="Output format"
    )
    analyze.add_argument("--cache", action="store_true", help="Enable on-disk match cache")

    compat = sub.add_parser("compat", help="Score the duo compatibility of two profiles")
    compat.add_argument("me", help="Path to my profile JSON")
    compat.add_argument("other", help="Path to the other player's profile JSON")
    compat.add_argument("--output", default=None, help="Path to output result JSON/text")
    compat.add_argument(
        "--output-format", choices=["json", "text"], default="json", help="Output format"
    )
    return parser.parse_args(argv)


def _analyze(args: argparse.Namespace) -> None:
    meta: Optional[FetchMeta] = None

    if args.from_raw:
        bundle, meta = bundle_from_json(_read_json(args.from_raw))
        if args.puuid:
            bundle.puuid = args.puuid
    else:
        if args.cache:
            os.environ["RIOT_CACHE"] = "1"
        config = riot_config_from_env()
        if not config.api_key:
            raise SystemExit(
                "RIOT_API_KEY not found. Set it in your shell or .env file before running."
            )
        if not args.puuid and not args.riot_id:
            raise SystemExit("Pass --puuid or --riot-id (or --from-raw).")
        bundle, meta = fetch_player_data(config, puuid=args.puuid, riot_id=args.riot_id, count=args.count)

    if args.save_raw:
        _write_json(args.save_raw, bundle_to_json(bundle, meta))

    if not bundle.puuid:
        raise SystemExit("Missing puuid; cannot build report.")

    report = build_report(bundle, meta, rank_tier=args.rank_tier)

    if args.output_format == "json":
        output_text = json.dumps(report, indent=2)
    else:
        output_text = render_text(report)
    _emit(output_text, args.output)


def _compat(args: argparse.Namespace) -> None:
    result = compute_compatibility_score(_read_json(args.me), _read_json(args.other)).to_dict()
    if args.output_format == "json":
        output_text = json.dumps(result, indent=2)
    else:
        output_text = render_compatibility_text(result)
    _emit(output_text, args.output)


def main(argv=None) -> None:
    load_dotenv()
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "analyze":
        _analyze(args)
    else:
        _compat(args)


if __name__ == "__main__":
    main()
