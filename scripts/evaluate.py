"""Run the pipeline over a scenario CSV and report template accuracy."""

import argparse
import random
import time
from pathlib import Path

import pandas as pd

from platter.config import settings
from platter.pipeline import process_ingredients

DEFAULT_SCENARIOS = Path(__file__).parent / "scenarios.csv"


def load_scenarios(path: Path) -> pd.DataFrame:
    """Load scenarios: one row per case with input, expected_type, expected_template."""
    df = pd.read_csv(path, keep_default_na=False)
    missing = {"input", "expected_type", "expected_template"} - set(df.columns)
    if missing:
        raise ValueError(f"Scenario file {path} is missing columns: {sorted(missing)}")
    return df


def run_scenarios(df: pd.DataFrame, seed: int) -> pd.DataFrame:
    rows = []
    for i, row in df.iterrows():
        rng = random.Random(seed)
        start = time.time()
        result = process_ingredients(row["input"], rng)
        elapsed = time.time() - start

        template = getattr(result, "template", "")
        rows.append({
            "case": i + 1,
            "input": row["input"],
            "expected_type": row["expected_type"],
            "type": result.type,
            "expected_template": row["expected_template"],
            "template": template,
            "rules": len(getattr(result, "rules_applied", [])),
            "ms": round(elapsed * 1000, 2),
        })

        ok = result.type == row["expected_type"] and template == row["expected_template"]
        print(
            f"  {'ok ' if ok else 'XX '} #{i + 1:>3} {row['input'][:40]:<40}"
            f" -> {result.type:<20} {template or '-'}"
        )

    report = pd.DataFrame(rows)
    report["type_ok"] = report["type"] == report["expected_type"]
    report["template_ok"] = report["template"] == report["expected_template"]
    return report


def main():
    parser = argparse.ArgumentParser(description="Evaluate template selection on a scenario CSV.")
    parser.add_argument("--scenarios", type=Path, default=DEFAULT_SCENARIOS)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--save", action="store_true", help="Write the report to outputs/")
    args = parser.parse_args()

    print(f"=== Evaluating {args.scenarios.name} ===\n")
    report = run_scenarios(load_scenarios(args.scenarios), args.seed)

    print("\n=== Summary ===\n")
    print(f"  cases:           {len(report)}")
    print(f"  type accuracy:     {report['type_ok'].mean():.1%}")
    print(f"  template accuracy: {report['template_ok'].mean():.1%}")
    print()
    print(report.groupby("expected_template")["template_ok"].agg(["count", "mean"]).to_string())

    if args.save:
        settings.output_dir.mkdir(parents=True, exist_ok=True)
        path = settings.output_dir / "evaluation.csv"
        report.to_csv(path, index=False)
        print(f"\nReport saved to: {path}")


if __name__ == "__main__":
    main()
