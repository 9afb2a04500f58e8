"""CLI entry point: list, services."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Optional

from scripts.resource_import.client import SERVICES
from scripts.resource_import.config import ImportConfig, load_config
from scripts.resource_import.exceptions import ImporterError
from scripts.resource_import.logging_config import configure_logging
from scripts.resource_import.resources import Resource

logger = logging.getLogger("resource_import.cli")


GENERATOR_REGISTRY: dict[str, tuple[str, str]] = {
    # name -> (module_path, class_name)
    "service_account": ("scripts.resource_import.generators.service_account", "ServiceAccountGenerator"),
    "api_key": ("scripts.resource_import.generators.api_key", "ApiKeyGenerator"),
}


def _get_generator(name: str, config: ImportConfig):
    """Instantiate a generator by name."""
    import importlib

    entry = GENERATOR_REGISTRY.get(name)
    if not entry:
        raise ValueError(
            f"unknown resource {name!r}, expected one of {sorted(GENERATOR_REGISTRY)}"
        )
    module_path, class_name = entry
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    return cls(config)


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def parse_resource_names(raw: str) -> list[str]:
    """Split a comma-separated resource list; "all" selects every generator."""
    names = [s.strip() for s in raw.split(",") if s.strip()]
    if not names or "all" in names:
        return list(GENERATOR_REGISTRY)
    unknown = [n for n in names if n not in GENERATOR_REGISTRY]
    if unknown:
        raise ValueError(
            f"unknown resources {unknown}, expected one of {sorted(GENERATOR_REGISTRY)}"
        )
    return names


def collect_resources(names: list[str], config: ImportConfig) -> list[Resource]:
    """Run the named generators in sequence and concatenate their output."""
    resources: list[Resource] = []
    for name in names:
        generator = _get_generator(name, config)
        try:
            logger.info("Starting collection for %s", name)
            resources.extend(generator.init_resources_with_tracking())
        finally:
            generator.close()
    return resources


def cmd_list(args: argparse.Namespace) -> int:
    """Collect resources and print them as a JSON array."""
    config = load_config(endpoint=args.endpoint, max_retries=args.max_retries)
    names = parse_resource_names(args.resources)

    try:
        resources = collect_resources(names, config)
    except ImporterError as exc:
        logger.error("Import failed: %s", exc)
        return 1

    payload = json.dumps([r.to_dict() for r in resources], indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(payload + "\n")
        logger.info("Wrote %d resources to %s", len(resources), args.output)
    else:
        print(payload)
    return 0


def cmd_services(args: argparse.Namespace) -> int:
    """Show the backing APIs and the generator that reads each one."""
    fmt = "{:<18}  {:<18}  {:<28}  {}"
    print(fmt.format("RESOURCE", "SERVICE", "TYPE", "PATH"))
    print("-" * 90)
    for name in GENERATOR_REGISTRY:
        generator = _get_generator(name, ImportConfig())
        service = generator.SERVICE
        print(fmt.format(name, service.name, generator.RESOURCE_TYPE, service.path))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resource-import",
        description="Enumerate Confluent Cloud resources for infrastructure-as-code import",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # list command
    list_parser = subparsers.add_parser("list", help="Collect resource descriptors")
    list_parser.add_argument(
        "--resources", "-r",
        default="all",
        help=f"Comma-separated subset of {', '.join(GENERATOR_REGISTRY)} (default: all)",
    )
    list_parser.add_argument(
        "--output", "-o",
        help="Write JSON to this file instead of stdout",
    )
    list_parser.add_argument(
        "--endpoint",
        help="Confluent Cloud API base URL (default: $CONFLUENT_ENDPOINT)",
    )
    list_parser.add_argument(
        "--max-retries",
        type=_non_negative_int,
        help="Retry ceiling per HTTP call (default: $CONFLUENT_MAX_RETRIES or 4)",
    )
    list_parser.set_defaults(func=cmd_list)

    # services command
    services_parser = subparsers.add_parser("services", help="Show backing APIs")
    services_parser.set_defaults(func=cmd_services)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))

    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        status = args.func(args)
    except ValueError as exc:
        parser.error(str(exc))
    sys.exit(status)
