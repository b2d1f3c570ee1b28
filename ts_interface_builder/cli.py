"""Command line entry point: ts-interface-builder [options] <typescript-file...>"""

import argparse
import sys

from ts_interface_builder import __version__
from ts_interface_builder.config.models import DEFAULT_SUFFIX
from ts_interface_builder.core.pipeline import InterfaceBuilder
from ts_interface_builder.exceptions import ConfigurationError
from ts_interface_builder.utils.logging_utils import PACKAGE_LOGGER, get_logger, setup_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ts-interface-builder",
        description="Create runtime validator module from TypeScript interfaces",
        usage="%(prog)s [options] <typescript-file...>",
    )
    parser.add_argument("--version", action="version", version=f"ts-interface-builder {__version__}")
    parser.add_argument("files", nargs="*", metavar="typescript-file", help="TypeScript files to compile")
    parser.add_argument(
        "-s",
        "--suffix",
        help=f"Suffix to append to generated files (default {DEFAULT_SUFFIX}); write --suffix=-x for values starting with -",
    )
    parser.add_argument(
        "-o",
        "--outDir",
        "--out-dir",
        dest="out_dir",
        metavar="PATH",
        help="Directory for output files; same as source file if omitted",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Produce verbose output")
    parser.add_argument("-c", "--config", help="Path to a YAML configuration file")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.files:
        parser.print_help()
        return 1

    # Command line options win over the config file
    config_overrides: dict = {"output": {}}
    if args.suffix is not None:
        config_overrides["output"]["suffix"] = args.suffix
    if args.out_dir is not None:
        config_overrides["output"]["out_dir"] = args.out_dir

    try:
        builder = InterfaceBuilder(config=args.config, config_overrides=config_overrides)
    except ConfigurationError as e:
        setup_logger(PACKAGE_LOGGER)
        logger.error(str(e))
        return 1

    log_config = builder.config.logging
    setup_logger(
        PACKAGE_LOGGER,
        level="INFO" if args.verbose and log_config.level != "DEBUG" else log_config.level,
        log_file=log_config.file,
        format_string=log_config.format,
    )

    def report(source, out_path):
        print(f"Compiling {source} -> {out_path}")

    result = builder.run(args.files, on_compile=report if args.verbose else None)
    if result.failed:
        logger.error(f"{len(result.failed)} of {len(result.files)} files failed to compile")
    if args.verbose:
        print(f"Compiled {len(result.succeeded)} of {len(result.files)} files in {result.execution_time:.2f}s")

    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main())
