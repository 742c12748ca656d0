"""Re-record golden outputs (dependency-free beyond the package itself).

Usage:
  python tools/record_golden.py [case ...]

Each case is a directory under ibm_cost_architect/tests/testdata holding
plan.json and usage.yml; expected.json is (re)written next to them. With no
arguments every case directory is re-recorded. Review the diff before
committing: a changed expected.json is a behaviour change.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ibm_cost_architect.breakdown import build_breakdown  # noqa: E402
from ibm_cost_architect.providers.terraform import load_plan_json, parse_plan_json  # noqa: E402
from ibm_cost_architect.providers.usage_file import UsageFile, load_usage_file  # noqa: E402
from ibm_cost_architect.reporting.format import render_json  # noqa: E402
from ibm_cost_architect.resources.registry import build_default_registry  # noqa: E402

TESTDATA = ROOT / "ibm_cost_architect" / "tests" / "testdata"
GOLDEN_REGION = "us-south"


def _fail(msg: str) -> None:
    print(f"FAIL: {msg}")
    raise SystemExit(2)


def record(case_dir: Path) -> bool:
    plan_path = case_dir / "plan.json"
    if not plan_path.exists():
        _fail(f"missing plan.json in {case_dir}")

    registry = build_default_registry()
    parsed = parse_plan_json(load_plan_json(plan_path), registry, GOLDEN_REGION)
    usage_path = case_dir / "usage.yml"
    usage = load_usage_file(usage_path) if usage_path.exists() else UsageFile()
    text = render_json(build_breakdown(parsed.resources, registry, usage), parsed.skipped)

    expected = case_dir / "expected.json"
    changed = not expected.exists() or expected.read_text(encoding="utf-8") != text
    if changed:
        expected.write_text(text, encoding="utf-8")
    return changed


def main() -> None:
    names = sys.argv[1:] or sorted(p.name for p in TESTDATA.iterdir() if (p / "plan.json").exists())
    for name in names:
        case_dir = TESTDATA / name
        if not case_dir.is_dir():
            _fail(f"unknown case: {name}")
        print(f"{name}: {'UPDATED' if record(case_dir) else 'unchanged'}")


if __name__ == "__main__":
    main()
