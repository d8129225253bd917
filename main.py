"""
TrustShield - Fraud-Aware Business Rating Evaluation

CLI entry point for scoring a ratings dataset.
"""

import argparse
import logging
import sys

from trustshield.orchestrator import ScoringOrchestrator
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def print_breakdown(breakdown: dict):
    """Print the analysis summary of one business."""
    print("=" * 60)
    print(f"{breakdown['name']} - Fraud Analysis")
    print("=" * 60)
    print(f"Category: {breakdown['category']}")
    print(f"Trust Score: {breakdown['trust_score']}/100 ({breakdown['band']})")
    print(f"Average Rating: {breakdown['average_rating']:.2f}")
    print(f"Entropy: {breakdown['entropy_percent']:.1f}%")
    if breakdown['ratings'] == 0:
        print("Volatility: n/a (no ratings)")
        print("Fraud Confidence: n/a (no ratings)")
    else:
        print(f"Volatility: {breakdown['volatility']:.2f}")
        print(f"Fraud Confidence: {breakdown['fraud_percent']:.1f}%")
    if breakdown['high_risk']:
        print("⚠️  Fraud model flags HIGH RISK")
    print("=" * 60)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="TrustShield - Fraud-Aware Business Rating Evaluation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Score a dataset, best businesses first
  python main.py --dataset data/businesses.json

  # Only restaurants, worst first
  python main.py --dataset data/businesses.json --category restaurant --sort low

  # Analysis of a single business from the mock dataset
  python main.py --mock --business "Golden Spoon"

  # Save the mock dataset for editing
  python main.py --save-mock data/mock_businesses.json
        """
    )

    parser.add_argument(
        "--dataset",
        default=str(settings.DEFAULT_DATASET_PATH),
        help=f"Businesses JSON file (default: {settings.DEFAULT_DATASET_PATH})"
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        default=settings.USE_MOCK_DATA,
        help="Score a generated mock dataset instead of reading --dataset"
    )

    parser.add_argument(
        "--category",
        default=settings.DEFAULT_CATEGORY_FILTER,
        help="Only include this category (default: all)"
    )

    parser.add_argument(
        "--sort",
        default=settings.DEFAULT_SORT,
        choices=["high", "low"],
        help=f"Sort by trust score (default: {settings.DEFAULT_SORT})"
    )

    parser.add_argument(
        "--business",
        help="Print the analysis of one business instead of writing a scoreboard"
    )

    parser.add_argument(
        "--save-mock",
        metavar="PATH",
        help="Write the generated mock dataset to PATH and exit"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    args = parser.parse_args()

    # Setup logging
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    # Print banner
    print("=" * 60)
    print("TrustShield - Fraud-Aware Rating Evaluation")
    print("=" * 60)
    print(f"Dataset: {'mock' if args.mock else args.dataset}")
    print(f"Category: {args.category}")
    print(f"Sort: {args.sort}")
    print("=" * 60)
    print()

    try:
        orchestrator = ScoringOrchestrator(
            output_root=args.output_dir,
            use_mock_data=args.mock
        )

        if args.save_mock:
            count = orchestrator.export_mock_dataset(args.save_mock)
            print(f"✅ Wrote {count} mock businesses to {args.save_mock}")
            sys.exit(0)

        if args.business:
            orchestrator.load_from_source(args.dataset)
            breakdown = orchestrator.breakdown(args.business)
            if breakdown is None:
                print(f"❌ Business not found: {args.business}")
                sys.exit(1)
            print_breakdown(breakdown)
            sys.exit(0)

        output_path = orchestrator.run(
            dataset_path=args.dataset,
            category=args.category,
            sort=args.sort,
            output_dir=args.output_dir
        )

        print()
        print("=" * 60)
        print("✅ Scoring completed successfully!")
        print("=" * 60)
        print(f"Scoreboard: {output_path}")
        print(f"Metadata: {output_path.replace('.csv', '_metadata.json')}")
        print("=" * 60)

        logger.info("TrustShield completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Scoring interrupted by user")
        print("\n⚠️  Scoring interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Scoring failed: {e}", exc_info=True)
        print(f"\n❌ Scoring failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
