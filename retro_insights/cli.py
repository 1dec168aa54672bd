import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from .calculator import run_calculators
from .calculators.summary import SummaryCalculator
from .calculators.velocity import VelocityCalculator
from .config import ConfigError, config_to_options, default_options
from .config_main import CALCULATORS
from .exceptions import DecodeError, EmptyInputError
from .normalizer import normalize
from .reader import read_rows
from .utils import set_chart_context
from .webapp.app import app as webapp

load_dotenv()

logger = logging.getLogger(__name__)


def configure_argument_parser():
    """Configure an ArgumentParser that manages command line options."""

    parser = argparse.ArgumentParser(
        description=(
            "Analyse a release export (Excel or CSV) and produce velocity, "
            "burn-up, module and efficiency data and charts."
        )
    )

    parser.add_argument(
        "input", metavar="export.xlsx", nargs="?", help="Work item export to analyse"
    )
    parser.add_argument(
        "-c", "--config", metavar="config.yml", help="Configuration file"
    )
    parser.add_argument("-v", dest="verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "-vv",
        dest="very_verbose",
        action="store_true",
        help="Even more verbose output",
    )
    parser.add_argument(
        "--sheet",
        metavar="NAME",
        help="Read this sheet of an Excel file instead of the first one",
    )

    parser.add_argument(
        "--server",
        metavar="127.0.0.1:8080",
        help=(
            "Run the upload dashboard as a web server instead of a command "
            "line tool, on the given host and/or port. "
            "The remaining options do not apply."
        ),
    )

    parser.add_argument(
        "--output-directory",
        "-o",
        metavar="metrics",
        help=(
            "Write output files to this directory, "
            "rather than the current working directory."
        ),
    )

    return parser


def main():
    parser = configure_argument_parser()
    args = parser.parse_args()

    if args.server:
        run_server(parser, args)
    else:
        sys.exit(run_command_line(parser, args))


def run_server(parser, args):
    host = None
    port = args.server

    if ":" in args.server:
        (host, port) = args.server.split(":")
    port = int(port)

    set_chart_context("paper")
    webapp.run(host=host, port=port)


def load_options(config_path):
    """Read options from `config_path`, or the defaults when it is None."""
    if not config_path:
        return default_options()

    logger.debug("Parsing options from %s", config_path)
    with open(config_path, encoding="utf-8") as config:
        return config_to_options(
            config.read(), cwd=os.path.dirname(os.path.abspath(config_path))
        )


def run_command_line(parser, args):
    """Run the pipeline for `args.input`. Returns the process exit status."""
    if not args.input:
        parser.print_usage()
        return 0

    logging.basicConfig(
        format="[%(asctime)s %(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        level=(
            logging.DEBUG
            if args.very_verbose
            else logging.INFO if args.verbose else logging.WARNING
        ),
    )

    try:
        options = load_options(args.config)
    except FileNotFoundError:
        print(
            f"Error: Configuration file '{args.config}' not found. "
            "Please provide a valid config file."
        )
        return 1
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    if args.sheet is not None:
        options["input"]["sheet"] = args.sheet

    if not os.path.exists(args.input):
        print(f"Error: Input file '{args.input}' not found.")
        return 1

    # Decode before changing directory so relative input paths still resolve
    try:
        rows = read_rows(args.input, sheet=options["input"]["sheet"])
        items = normalize(
            rows,
            aliases=options["columns"],
            warn_on_malformed=options["settings"]["warn_on_malformed"],
        )
    except (DecodeError, EmptyInputError) as e:
        print(f"Error: {e}")
        return 1

    # Set charting context, which determines how charts are rendered
    set_chart_context("paper")

    output_dir = options.get("output_directory")
    if args.output_directory:
        output_dir = args.output_directory
    if output_dir:
        logger.info("Changing working directory to %s", output_dir)
        os.makedirs(output_dir, exist_ok=True)
        os.chdir(output_dir)

    logger.info("Running calculators")
    results = run_calculators(CALCULATORS, items, options["settings"])

    print_summary(results[SummaryCalculator], len(results[VelocityCalculator]))
    return 0


def print_summary(summary, release_count):
    print(f"Total points:         {summary.total_points:g}")
    print(f"Tickets done:         {summary.total_items}")
    print(f"Avg complexity:       {summary.avg_complexity}")
    print(f"Release cycles:       {release_count}")
    print(f"Release/sprint pairs: {summary.distinct_release_sprint_pairs}")


if __name__ == "__main__":
    main()
