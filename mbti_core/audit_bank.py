from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from . import config
from .question_bank import load_bank
from .types import DICHOTOMIES, Question, dichotomy_of

PAIRS: tuple[str, ...] = tuple(a.value + b.value for a, b in DICHOTOMIES)


def _blank_band() -> dict[str, object]:
    return {"total": 0, "pairs": {p: 0 for p in PAIRS}}


def _pair_of(q: Question) -> str:
    a, b = dichotomy_of(q.trait_alpha)
    return a.value + b.value


def audit_items(items: Iterable[Question]) -> dict[str, object]:
    items = list(items)
    coverage: dict[str, dict[str, object]] = {}
    totals = {p: 0 for p in PAIRS}

    for q in items:
        band = f"{q.age_from}-{q.age_to}"
        data = coverage.setdefault(band, _blank_band())
        pair = _pair_of(q)
        data["total"] += 1  # type: ignore[operator]
        data["pairs"][pair] += 1  # type: ignore[index]
        totals[pair] += 1

    warnings: list[str] = []
    for band, data in coverage.items():
        total = data["total"]
        if total < config.SAMPLE_SIZE:  # type: ignore[operator]
            warnings.append(f"band {band} has {total} questions (<{config.SAMPLE_SIZE})")
        pairs = data["pairs"]  # type: ignore[assignment]
        for p in PAIRS:
            if pairs.get(p, 0) < config.BANK_MIN_PER_DICHOTOMY:
                warnings.append(
                    f"band {band} {p} has {pairs.get(p, 0)} (<{config.BANK_MIN_PER_DICHOTOMY})"
                )

    uncovered = [
        age for age in range(config.AUDIT_AGE_MIN, config.AUDIT_AGE_MAX + 1)
        if not any(q.eligible_for(age) for q in items)
    ]
    if uncovered:
        warnings.append(f"no questions for ages {_ranges(uncovered)}")

    return {"coverage": coverage, "warnings": warnings, "totals": totals, "uncovered_ages": uncovered}


def _ranges(ages: list[int]) -> str:
    spans: list[str] = []
    start = prev = ages[0]
    for a in ages[1:] + [None]:  # type: ignore[list-item]
        if a is not None and a == prev + 1:
            prev = a
            continue
        spans.append(str(start) if start == prev else f"{start}-{prev}")
        if a is not None:
            start = prev = a
    return ", ".join(spans)


def print_report(summary: dict[str, object]) -> None:
    coverage: dict[str, dict[str, object]] = summary["coverage"]  # type: ignore[assignment]
    print("=== Bank Coverage ===")
    for band in sorted(coverage, key=lambda b: int(b.split("-")[0])):
        data = coverage[band]
        pairs = data["pairs"]  # type: ignore[assignment]
        row = "  ".join(f"{p}:{pairs.get(p, 0):3d}" for p in PAIRS)
        print(f"  ages {band:>7}  total:{data['total']:3d}  {row}")

    warnings: list[str] = summary["warnings"]  # type: ignore[assignment]
    if warnings:
        print("\nWarnings:")
        for msg in warnings:
            print(f" - {msg}")
    else:
        print("\nNo warnings.")

    print("\nTotals:", summary["totals"])


def write_summary(summary: dict[str, object], path: Path = Path("bank_audit.json")) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text


def main(_argv: list[str] | None = None) -> int:
    items = load_bank()
    summary = audit_items(items)
    print_report(summary)
    write_summary(summary)
    return 2 if summary["warnings"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
