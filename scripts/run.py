import argparse
import random

from platter.dinner import find_dinner
from platter.pipeline import PlatingPipeline
from platter.templates import TEMPLATES


def main():
    parser = argparse.ArgumentParser(description="Plate an ingredient list and print the result as JSON.")
    parser.add_argument("ingredients", help='Comma- or newline-separated list, e.g. "brie, crackers, grapes"')
    parser.add_argument(
        "--template",
        choices=sorted(TEMPLATES),
        default=None,
        help="Force a template instead of automatic selection",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for snark/affirmation selection (reproducible output)",
    )
    parser.add_argument(
        "--dinner",
        action="store_true",
        help="Also print the curated dinner name and tip",
    )
    parser.add_argument(
        "--save-log",
        action="store_true",
        help="Write the request log to outputs/plating_log.json",
    )
    args = parser.parse_args()

    rng = random.Random(args.seed) if args.seed is not None else None
    pipeline = PlatingPipeline(rng=rng)
    result = pipeline.process(args.ingredients, template_id=args.template)
    print(result.model_dump_json(indent=2))

    if args.dinner:
        match = find_dinner(args.ingredients, rng)
        print(f"\n{match.name} [{match.template}]")
        print(f"  {match.validation}")
        print(f"  Tip: {match.tip}")

    if args.save_log:
        pipeline.save_log()


if __name__ == "__main__":
    main()
