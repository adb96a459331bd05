"""
CLI entrypoint for quantedge-agents.
Runs one batch analysis for the given tickers and prints a text dashboard or JSON.

Pretty output goes to stdout via oprint().
Diagnostics/trace/debug go to stderr via logging.

Exit codes: 0 success, 1 analysis failed, 2 blank input / bad configuration.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Sequence

from quantedge_agents.api.run_analysis import run_analysis
from quantedge_agents.cli.logging_setup import setup_cli_logging
from quantedge_agents.contracts.analysis import AnalysisResult
from quantedge_agents.errors import AnalysisError, InputEmpty, user_facing_message
from quantedge_agents.llm.client import LLMRuntimeConfig
from quantedge_agents.llm.providers import LLMProvider
from quantedge_agents.presentation.dashboard import StockView, build_dashboard

logger = logging.getLogger("quantedge_agents.cli")


def oprint(*args, **kwargs) -> None:
    """
    User-facing output printer (stdout).
    """
    try:
        print(*args, file=sys.stdout, flush=True, **kwargs)
    except BrokenPipeError:
        raise SystemExit(0)


def _print_section(title: str) -> None:
    oprint("")
    oprint(title)
    oprint("=" * len(title))


def _print_pretty_stock(view: StockView) -> None:
    header = f"{view.company_name} ({view.ticker})"
    oprint(header)
    oprint("-" * len(header))
    oprint(f"Price: {view.price} | Recommendation: {view.recommendation}")
    oprint(f"Quality score: {view.quality_score:g} / 100 ({view.quality_band})")

    _print_section("Quantitative Matrix")
    for row in view.factor_rows:
        oprint(f"{row.factor:<10} {row.primary:<32} [{row.status}]")
        if row.secondary:
            oprint(f"{'':<10} {row.secondary}")

    _print_section("Fundamental DNA")
    for tile in view.fundamentals:
        oprint(f"{tile.label + ':':<22} {tile.value}")

    _print_section("Factor Radar")
    for point in view.radar:
        oprint(f"{point.label + ':':<10} {point.value:g}")

    _print_section("Quant Analysis Narrative")
    oprint(view.deep_analysis.strip())

    if view.risk_factors:
        _print_section("Risk Exposure")
        for i, risk in enumerate(view.risk_factors, 1):
            oprint(f"{i}. {risk}")

    if view.sources:
        _print_section("Sources")
        for src in view.sources:
            oprint(f"- {src.title}: {src.uri}")
    oprint("")


def _print_pretty(results: Sequence[AnalysisResult]) -> None:
    dashboard = build_dashboard(results)
    for view in dashboard.stocks:
        _print_pretty_stock(view)


def _write_json(results: List[AnalysisResult], indent: int) -> None:
    payload = {
        "tickers": [r.ticker for r in results],
        "results": [r.to_wire() for r in results],
        "dashboard": build_dashboard(results).model_dump(mode="json"),
    }
    try:
        sys.stdout.write(json.dumps(payload, indent=indent) + "\n")
        sys.stdout.flush()
    except BrokenPipeError:
        return


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="quantedge", description="3-factor batch stock analysis")
    p.add_argument("--tickers", required=True, help='Comma/space separated, e.g. "AAPL, NVDA, MSFT"')

    p.add_argument("--output", choices=["pretty", "json"], default="pretty")
    p.add_argument("--json-indent", type=int, default=2)

    p.add_argument("--quiet", action="store_true")
    p.add_argument("--trace", action="store_true")

    p.add_argument("--provider", choices=[x.value for x in LLMProvider], default=None)
    p.add_argument("--model", default=None)
    return p


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    setup_cli_logging(trace=args.trace, quiet=args.quiet)

    try:
        runtime_config = LLMRuntimeConfig.from_env().with_overrides(
            provider=args.provider,
            model_identifier=args.model,
            trace_enabled=True if args.trace else None,
        )
    except ValueError as e:
        logger.error(str(e))
        raise SystemExit(2)

    try:
        results = asyncio.run(run_analysis(text=args.tickers, runtime_config=runtime_config))
    except InputEmpty as e:
        logger.error(str(e))
        raise SystemExit(2)
    except AnalysisError as e:
        logger.error("Analysis failed: %s", user_facing_message(e))
        raise SystemExit(1)
    except Exception as e:
        logger.exception("Analysis failed: %s", user_facing_message(e))
        raise SystemExit(1)

    if args.output == "json":
        _write_json(results, args.json_indent)
    else:
        _print_pretty(results)

    if not args.quiet and args.output == "pretty":
        logger.info("provider=%s model=%s", runtime_config.provider.value, runtime_config.model_identifier)


if __name__ == "__main__":
    main()
