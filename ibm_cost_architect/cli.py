#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
IBM Cost Architect – CLI

Flow:
- Reads a Terraform plan JSON (terraform show -json).
- Builds one BillableResource per supported resource.
- Applies an optional usage file (YAML) to each resource.
- Resolves every resource into cost components and prints them as a table
  or writes them as JSON.
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from importlib import metadata
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .breakdown import build_breakdown
from .config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_REGION,
    DEFINITIONS_DIR,
    RUNS_DIR,
    TRACE_ENABLED,
)
from .providers.terraform import load_plan_json, parse_plan_json
from .providers.usage_file import UsageFile, load_usage_file, render_usage_template
from .reporting.format import render_json, render_table, summarize
from .resources.registry import build_default_registry
from .utils.trace import build_trace_logger

console = Console()
logger = logging.getLogger("ibm_cost_architect")


# --------------------------------------------------------------------
# Argument parsing
# --------------------------------------------------------------------
def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--path",
        required=True,
        help="Terraform plan JSON file (output of `terraform show -json plan.out`).",
    )
    p.add_argument(
        "--region",
        type=str,
        default=None,
        help=f"Region for resources with no region attribute (default: {DEFAULT_REGION}).",
    )
    p.add_argument(
        "--definitions-dir",
        type=str,
        default=DEFINITIONS_DIR or None,
        help="Directory with resource-type definitions (default: bundled definitions).",
    )
    p.add_argument(
        "--log-level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default=DEFAULT_LOG_LEVEL,
        help="Logging level for internal messages.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ibm-cost",
        description=(
            "IBM Cost Architect – usage-driven cost components for Terraform plans.\n\n"
            "Resolves each supported resource into price-query cost components\n"
            "(quantity, unit, product/price filters) ready for a price catalog."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    bd = sub.add_parser("breakdown", help="Resolve cost components for a plan.")
    _add_common(bd)
    bd.add_argument("--usage-file", type=str, default=None, help="YAML usage file.")
    bd.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="table: rich table on the console; json: deterministic JSON.",
    )
    bd.add_argument("--out", type=str, default=None, help="Write output to this file instead of stdout.")
    bd.add_argument("--run-id", type=str, default=None, help="Run folder name under runs/ (default: timestamp).")
    bd.add_argument("--trace", action="store_true", help="Force writing a run trace JSONL.")
    bd.add_argument("--trace-path", type=str, default=None, help="Override trace path (default: runs/<id>/trace.jsonl).")

    tpl = sub.add_parser("usage-template", help="Write a usage file skeleton for a plan.")
    _add_common(tpl)
    tpl.add_argument("--out", type=str, default=None, help="Write the template to this file instead of stdout.")

    return parser


# --------------------------------------------------------------------
# Helpers
# --------------------------------------------------------------------
def _configure_logging(level: str, log_file: Optional[Path] = None) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def _tool_version() -> str:
    try:
        return metadata.version("ibm-cost-architect")
    except metadata.PackageNotFoundError:
        return "dev"


def _write_or_print(text: str, out: Optional[str]) -> None:
    if out:
        Path(out).write_text(text, encoding="utf-8")
        console.print(f"[green]Saved output to {out}[/green]")
    else:
        sys.stdout.write(text)


def _load_inputs(args: argparse.Namespace):
    registry = build_default_registry(Path(args.definitions_dir) if args.definitions_dir else None)
    plan = load_plan_json(args.path)
    parsed = parse_plan_json(plan, registry, args.region or DEFAULT_REGION)
    return registry, parsed


# --------------------------------------------------------------------
# Commands
# --------------------------------------------------------------------
def cmd_breakdown(args: argparse.Namespace) -> int:
    run_id = args.run_id or datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    run_dir = Path(RUNS_DIR) / run_id
    _configure_logging(args.log_level, run_dir / "console.log")

    trace_path = Path(args.trace_path) if args.trace_path else run_dir / "trace.jsonl"
    trace = build_trace_logger(trace_path, enabled=TRACE_ENABLED or args.trace, run_id=run_id)
    trace.log(
        "setup",
        {
            "tool_version": _tool_version(),
            "plan_path": args.path,
            "usage_file": args.usage_file,
            "default_region": args.region or DEFAULT_REGION,
        },
    )

    registry, parsed = _load_inputs(args)
    trace.log(
        "parsed",
        {
            "supported": [r.address for r in parsed.resources],
            "skipped": [{"address": a, "type": t} for a, t in parsed.skipped],
        },
    )

    usage = load_usage_file(args.usage_file) if args.usage_file else UsageFile()
    resources = build_breakdown(parsed.resources, registry, usage, trace=trace)
    stats = summarize(resources)
    trace.log("output", {"format": args.format, "summary": stats})

    if args.format == "json":
        _write_or_print(render_json(resources, parsed.skipped), args.out)
    else:
        console.print(render_table(resources))
        if parsed.skipped:
            console.print(f"[yellow]{len(parsed.skipped)} resource(s) not supported:[/yellow]")
            for address, rtype in parsed.skipped:
                console.print(f"  - {address} ({rtype})")
        if stats["usage_dependent"]:
            console.print(
                f"[yellow]{stats['usage_dependent']} component(s) depend on usage that was not provided. "
                "Use --usage-file to supply it.[/yellow]"
            )
    logger.info("Resolved %d resources into %d components", stats["resources"], stats["components"])
    return 0


def cmd_usage_template(args: argparse.Namespace) -> int:
    _configure_logging(args.log_level)
    registry, parsed = _load_inputs(args)
    _write_or_print(render_usage_template(parsed.resources, registry), args.out)
    return 0


# --------------------------------------------------------------------
# Main
# --------------------------------------------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    commands = {
        "breakdown": cmd_breakdown,
        "usage-template": cmd_usage_template,
    }
    try:
        return commands[args.command](args)
    except (OSError, ValueError) as ex:
        logger.error("%s failed: %s", args.command, ex)
        console.print(f"[red]{args.command} failed: {escape(str(ex))}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
