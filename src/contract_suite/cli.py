# cli.py

"""Command line entry point: inject tests into a Postman collection."""

import argparse
import sys
from typing import List, Optional

from contract_suite.application import ContractTestSuite
from contract_suite.common.logger import LoggerFactory, LogLevel
from contract_suite.config.settings import settings
from contract_suite.core.config_loader import load_suite_config
from contract_suite.core.errors import ContractSuiteError
from contract_suite.core.oas_parser import OpenApiParser
from contract_suite.core.postman_parser import (
    PostmanParser,
    load_collection,
    write_collection,
)
from contract_suite.schemas.config import SuiteConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contract-suite",
        description=(
            "Inject contract tests and request variations into a Postman collection"
        ),
    )
    parser.add_argument(
        "--oas", required=True, help="Path to the OpenAPI document (JSON or YAML)"
    )
    parser.add_argument(
        "--collection", required=True, help="Path to the Postman collection (JSON)"
    )
    parser.add_argument(
        "--config", help="Path to the suite configuration (JSON or YAML)"
    )
    parser.add_argument(
        "--output",
        help="Where to write the resulting collection (defaults to --collection)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="version",
        version=f"{settings.APP_NAME} {settings.APP_VERSION}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        settings.LOG_LEVEL = LogLevel.DEBUG.value

    logger = LoggerFactory.get_logger(name="contract-suite.cli")
    logger.add_context(oas=args.oas, collection=args.collection)

    try:
        oas_parser = OpenApiParser.from_file(args.oas)
        postman_parser = PostmanParser(load_collection(args.collection), oas_parser)
        config = load_suite_config(args.config) if args.config else SuiteConfig()

        suite = ContractTestSuite(oas_parser, postman_parser, config)
        collection = suite.run()

        output = args.output or args.collection
        write_collection(collection, output)
    except ContractSuiteError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Wrote collection to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
