from __future__ import annotations

import argparse
import asyncio
import logging

from resume_scoring.core.config import settings
from resume_scoring.tuning import AdaptiveWeightTuner, SQLiteFeedbackStore, SQLiteWeightConfigStore

logger = logging.getLogger("tune_weights")


async def _run(args: argparse.Namespace) -> None:
    tuner = AdaptiveWeightTuner(
        SQLiteFeedbackStore(args.db),
        SQLiteWeightConfigStore(args.db),
    )

    if args.rollback:
        config = await tuner.activate_weight_configuration(args.rollback)
        logger.info("rolled back to %s (%s)", config.id, config.weights.as_dict())
        return

    config = await tuner.update_weights_based_on_feedback(args.min_feedback, args.role)
    if config is None:
        logger.info("not enough feedback to propose new weights")
        return

    logger.info("proposed %s: %s", config.id, config.weights.as_dict())
    if args.activate:
        config = await tuner.activate_weight_configuration(config.id)
        logger.info("activated %s", config.id)


def main() -> None:
    parser = argparse.ArgumentParser(description="Propose (and optionally activate) weights learned from feedback.")
    parser.add_argument("--db", default=settings.feedback_db_path, help="SQLite feedback database path")
    parser.add_argument("--role", default=None, help="Tune a single role instead of the global weights")
    parser.add_argument(
        "--min-feedback",
        type=int,
        default=settings.tuning_min_feedback,
        help="Minimum feedback records in the window",
    )
    parser.add_argument("--activate", action="store_true", help="Activate the proposal immediately")
    parser.add_argument("--rollback", default=None, help="Re-activate an earlier configuration id and exit")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level, format="%(message)s")
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
