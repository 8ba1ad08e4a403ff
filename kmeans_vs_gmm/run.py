# run.py

import argparse
import logging
import sys

from kmeans_vs_gmm.clustering_utils import run_and_report
from kmeans_vs_gmm.config import DPI, N_INIT, OUTPUT_PNG, RANDOM_STATE
from kmeans_vs_gmm.errors import (
    ConfigurationError,
    DegenerateClusteringError,
    DegenerateCovarianceError,
    NoDemonstrativeExampleError,
)

logger = logging.getLogger("kmeans_vs_gmm")

EXIT_CONFIG = 2
EXIT_NUMERICAL = 3
EXIT_NO_EXAMPLE = 4
EXIT_IO = 5


def build_parser():
    parser = argparse.ArgumentParser(
        prog="kmeans-vs-gmm",
        description="K-means vs Gaussian mixture: same centers, different assignments.",
    )
    parser.add_argument("--seed", type=int, default=RANDOM_STATE,
                        help="random seed for data generation and K-means (default: %(default)s)")
    parser.add_argument("-o", "--output", default=OUTPUT_PNG,
                        help="PNG file to write (default: %(default)s)")
    parser.add_argument("--dpi", type=int, default=DPI,
                        help="image resolution (default: %(default)s)")
    parser.add_argument("--n-init", type=int, default=N_INIT,
                        help="K-means random restarts (default: %(default)s)")
    parser.add_argument("--results-csv", default=None,
                        help="also write the per-point assignment table to this CSV")
    parser.add_argument("--caption", default=None,
                        help="caption in the bottom-right corner of the figure")
    parser.add_argument("--show", action="store_true",
                        help="display the figure before saving it")
    parser.add_argument("--no-summary", action="store_true",
                        help="skip the model summary block of the report")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run_and_report(
            random_state=args.seed,
            n_init=args.n_init,
            output=args.output,
            dpi=args.dpi,
            results_csv=args.results_csv,
            caption=args.caption,
            show=args.show,
            summary=not args.no_summary,
        )
    except ConfigurationError as err:
        logger.error("Configuration error: %s", err)
        return EXIT_CONFIG
    except (DegenerateClusteringError, DegenerateCovarianceError) as err:
        logger.error("Numerical degeneracy: %s", err)
        return EXIT_NUMERICAL
    except NoDemonstrativeExampleError as err:
        logger.error("No demonstrative example found: %s", err)
        return EXIT_NO_EXAMPLE
    except OSError as err:
        logger.error("Could not write output: %s", err)
        return EXIT_IO
    return 0


if __name__ == "__main__":
    sys.exit(main())
