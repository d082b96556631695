"""
Command-line entry point.

Usage:
    complaint-analysis --data input_data/complaints.csv.zip --topics 20
    python -m complaint_analysis --sample-size 2000 --no-plots
"""

import argparse
import logging
from typing import Optional, Sequence

from .config import (
    ARTIFACTS_DIR,
    CONFIDENCE,
    DATA_PATH,
    FIGURES_DIR,
    L1_RATIO,
    N_TOPICS,
    RANDOM_STATE,
    SAMPLE_PER_PRODUCT,
    TOP_N_PRODUCTS,
    AnalysisConfig,
    configure_logging,
)
from .pipeline import run_analysis

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="complaint-analysis",
        description="Topic model and product classifiers over CFPB complaint narratives.",
    )
    parser.add_argument("--data", default=str(DATA_PATH), help="complaints CSV (may be zipped)")
    parser.add_argument("--figures-dir", default=str(FIGURES_DIR))
    parser.add_argument("--artifacts-dir", default=str(ARTIFACTS_DIR))
    parser.add_argument("--sample-size", type=int, default=SAMPLE_PER_PRODUCT,
                        help="complaints sampled per product")
    parser.add_argument("--products", type=int, default=TOP_N_PRODUCTS,
                        help="number of most frequent products kept")
    parser.add_argument("--topics", type=int, default=N_TOPICS)
    parser.add_argument("--l1-ratio", type=float, default=L1_RATIO,
                        help="1.0 for the LASSO, lower for elastic-net")
    parser.add_argument("--confidence", type=float, default=CONFIDENCE,
                        help="coverage of the accuracy intervals")
    parser.add_argument("--random-state", type=int, default=RANDOM_STATE)
    parser.add_argument("--no-plots", action="store_true")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def config_from_args(args) -> AnalysisConfig:
    return AnalysisConfig(
        data_path=args.data,
        figures_dir=args.figures_dir,
        artifacts_dir=args.artifacts_dir,
        sample_per_product=args.sample_size,
        top_n_products=args.products,
        n_topics=args.topics,
        l1_ratio=args.l1_ratio,
        random_state=args.random_state,
        confidence=args.confidence,
        make_plots=not args.no_plots,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    report = run_analysis(config_from_args(args))

    logger.info("Classifier accuracy: %.1f%% (majority baseline %.1f%%)",
                100 * report.classifier_accuracy, 100 * report.baseline_accuracy)
    for product, terms in report.lasso_terms.items():
        logger.info("LASSO terms for %s: %s", product, ", ".join(t for t, _ in terms))
    return 0
