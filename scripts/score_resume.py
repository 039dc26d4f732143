from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from resume_scoring.core.config import settings
from resume_scoring.engine import calculate_pro_plus_score
from resume_scoring.schemas.scoring import ScoringOptions


def _read_text(path: str | None) -> str | None:
    if not path:
        return None
    return Path(path).read_text(encoding="utf-8")


def main() -> None:
    parser = argparse.ArgumentParser(description="Score a plain-text resume and print the result as JSON.")
    parser.add_argument("resume", help="Path to the resume text file")
    parser.add_argument("--jd", default=None, help="Path to a job description text file")
    parser.add_argument("--role", default="General", help="Target job role")
    parser.add_argument(
        "--model",
        choices=("pro", "three_axis"),
        default="pro",
        help="Which score drives the overall score and grade",
    )
    parser.add_argument("--insights", action="store_true", help="Include AI insights (template fallback)")
    parser.add_argument("--no-suggestions", action="store_true", help="Skip phrase suggestions")
    parser.add_argument("--out", default=None, help="Write JSON here instead of stdout")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level, format="%(message)s")

    options = ScoringOptions(
        job_role=args.role,
        job_description=_read_text(args.jd),
        score_model=args.model,
        include_ai_insights=args.insights,
        include_suggestions=not args.no_suggestions,
    )
    result = asyncio.run(calculate_pro_plus_score(_read_text(args.resume) or "", options))
    payload = result.model_dump_json(indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(payload + "\n", encoding="utf-8")
    else:
        print(payload)


if __name__ == "__main__":
    main()
