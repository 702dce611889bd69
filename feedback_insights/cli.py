"""
Feedback Insights CLI
=====================

Command-line interface for running the soft-skill analysis offline.

Usage:
    python -m feedback_insights.cli analyze comments.json --month 4 --year 2024
    python -m feedback_insights.cli analyze comments.json --month 4 --year 2024 --json
    python -m feedback_insights.cli trends comments.json --months 6
    python -m feedback_insights.cli score "Es muy capaz pero tiene un problema"
    python -m feedback_insights.cli extract "Es muy pasivo y llega tarde"

comments.json is a JSON list of records with id, session_id, mentor_id,
mentee_identifier, text and an ISO-8601 timestamp (camelCase keys from
the web app are accepted too).
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List

from dotenv import load_dotenv
load_dotenv()

from .config import AnalyzerConfig, LoggingConfig
from .logging_config import setup_logging
from .softskills.monthly_aggregator import MonthlyAggregator
from .softskills.skill_models import Comment, PeriodReport
from .softskills.trends import analyze_recent_months, analyze_trends, overall_top_issues

logger = logging.getLogger(__name__)


def load_comments(path: str) -> List[Comment]:
    """Read a JSON list of comment records."""
    with open(Path(path), "r", encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a JSON list of comments")
    return [Comment.from_dict(r) for r in records]


def print_report(report: PeriodReport):
    print(f"\n=== Soft skills — {report.period} ===")
    print(f"Comments analyzed: {report.total_comments}")

    s = report.average_sentiment
    print(
        f"Average sentiment: {s.overall.value} "
        f"(+{s.positive:.2f} / -{s.negative:.2f} / ={s.neutral:.2f})"
    )

    if report.ranked_issues:
        print("\nRanked issues:")
        for rank, issue in enumerate(report.ranked_issues, 1):
            print(
                f"  {rank:>2}. {issue.skill_key:<25} {issue.mentions:>3} mentions  "
                f"[{issue.category.value}, {issue.severity.value}]"
            )

    print("\nInsights:")
    for line in report.insights:
        print(f"  - {line}")


def cmd_analyze(args, aggregator: MonthlyAggregator) -> int:
    comments = load_comments(args.file)
    report = aggregator.analyze_period(comments, args.month, args.year)
    if args.json:
        print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    else:
        print_report(report)
    return 0


def cmd_trends(args, aggregator: MonthlyAggregator) -> int:
    comments = load_comments(args.file)
    now = datetime.fromisoformat(args.now) if args.now else None
    reports = analyze_recent_months(comments, args.months, now=now, aggregator=aggregator)
    output = {
        "analyses": [r.to_dict() for r in reports],
        "trends": analyze_trends(reports).to_dict(),
        "overall_top3": overall_top_issues(reports),
    }
    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


def cmd_score(args, aggregator: MonthlyAggregator) -> int:
    print(json.dumps(aggregator.scorer.score(args.text).to_dict(), ensure_ascii=False, indent=2))
    return 0


def cmd_extract(args, aggregator: MonthlyAggregator) -> int:
    issues = aggregator.extractor.extract(args.text)
    print(json.dumps([i.to_dict() for i in issues], ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Soft-skill insights from mentor feedback")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze one month of comments")
    analyze.add_argument("file", help="JSON file with a list of comments")
    analyze.add_argument("--month", type=int, required=True, choices=range(12),
                         metavar="0-11", help="Month, 0 = January")
    analyze.add_argument("--year", type=int, required=True)
    analyze.add_argument("--json", action="store_true", help="Print the report as JSON")
    analyze.set_defaults(func=cmd_analyze)

    trends = subparsers.add_parser("trends", help="Analyze the last N months")
    trends.add_argument("file", help="JSON file with a list of comments")
    trends.add_argument("--months", type=int, default=6)
    trends.add_argument("--now", default=None, help="Reference date (ISO), default: today")
    trends.set_defaults(func=cmd_trends)

    score = subparsers.add_parser("score", help="Score the sentiment of a text")
    score.add_argument("text")
    score.set_defaults(func=cmd_score)

    extract = subparsers.add_parser("extract", help="Extract soft-skill issues from a text")
    extract.add_argument("text")
    extract.set_defaults(func=cmd_extract)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    log_config = LoggingConfig()
    setup_logging(
        args.log_level or log_config.level,
        log_config.json_output,
        log_config.log_file,
        stream=sys.stderr,
    )

    try:
        aggregator = MonthlyAggregator.from_config(AnalyzerConfig())
        return args.func(args, aggregator)
    except (OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
