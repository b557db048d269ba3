import sys
import json
import logging
import argparse

from core.config_loader import load_config
from core.engine import ReadinessEngine
from core.exceptions import NotFoundException, PersistenceFailure
from database.models import Base

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Placement readiness scoring and ranking")
    parser.add_argument("--config", default="config.yaml", help="Path to config YAML")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create database tables")

    score = sub.add_parser("score", help="Recalculate one student's readiness score")
    score.add_argument("student_id")

    sub.add_parser("score-all", help="Recalculate every student, then the global ranking")
    sub.add_parser("rank-global", help="Recalculate the global ranking")

    rank_job = sub.add_parser("rank-job", help="Recalculate a job's candidate ranking")
    rank_job.add_argument("job_id")

    rank = sub.add_parser("rank", help="Show a student's global rank")
    rank.add_argument("student_id")

    pace = sub.add_parser("pace", help="Show a student's learning pace")
    pace.add_argument("student_id")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    engine = ReadinessEngine.from_config(config)

    try:
        return run_command(engine, args)
    except NotFoundException as e:
        logger.error(str(e))
        return 1
    except PersistenceFailure as e:
        logger.error(f"Store rejected the write: {e}")
        return 2


def run_command(engine: ReadinessEngine, args) -> int:
    if args.command == "init-db":
        Base.metadata.create_all(engine.session_factory.kw['bind'])
        logger.info("Database tables created")
        return 0

    if args.command == "score":
        result = engine.recalculate_score(args.student_id)
        print(json.dumps(result.to_dict(), indent=2))
    elif args.command == "score-all":
        result = engine.recalculate_all_scores()
        print(json.dumps({
            'processed': result.processed,
            'failed': result.failed,
            'ranked': result.ranking.ranked_count if result.ranking else 0,
        }, indent=2))
    elif args.command == "rank-global":
        print(engine.recalculate_global_rankings())
    elif args.command == "rank-job":
        print(engine.recalculate_job_rankings(args.job_id))
    elif args.command == "rank":
        rank = engine.get_student_global_rank(args.student_id)
        print(json.dumps(rank.__dict__, indent=2))
    elif args.command == "pace":
        report = engine.get_learning_pace(args.student_id)
        print(json.dumps(report.__dict__, indent=2, default=str))

    return 0


if __name__ == "__main__":
    sys.exit(main())
