"""CLI entry point for the authenticator conformance tests."""

import argparse
import asyncio
import datetime
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from ctap_conformance.devices.loading import open_device
from ctap_conformance.errors import DeviceSetupError, DiscoveryError, TransportError
from ctap_conformance.models.definition import CommandDefinition
from ctap_conformance.runner import ConformanceRunner
from ctap_conformance.sink import StreamSink
from ctap_conformance.suites import default_suite
from ctap_conformance.tracker import DeviceTracker

EXIT_PASSED = 0
EXIT_FAILED_CHECKS = 1
EXIT_ABORTED = 2


async def run(
    device_key: str,
    device_config_json: str,
    tracker: DeviceTracker,
    definitions: Sequence[CommandDefinition],
) -> int:
    """Discover the device and run all definitions against it.

    Returns:
        Exit code, ``EXIT_ABORTED`` if the device could not be opened or the
        run stopped early

    """
    log = logging.getLogger("ctap_conformance")

    try:
        async with open_device(device_key, device_config_json) as device:
            runner = ConformanceRunner(device=device, tracker=tracker)
            await runner.discover()
            await runner.run_suite(definitions)
    except (DeviceSetupError, TransportError, DiscoveryError) as e:
        log.error("Conformance run aborted: %s", e)
        tracker.add_problem(f"Conformance run aborted: {e}")
        return EXIT_ABORTED

    return EXIT_FAILED_CHECKS if tracker.failed_checks else EXIT_PASSED


def write_results(path: Path, results: dict[str, object]) -> None:
    """Write the structured report as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(results, indent=2) + "\n")


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run negative conformance tests against an authenticator"
    )
    parser.add_argument(
        "--device",
        default="hid",
        help="Device plugin key (default: hid)",
    )
    parser.add_argument(
        "--device-config",
        default="{}",
        help="JSON configuration for the device plugin",
    )
    parser.add_argument(
        "--rp-id",
        default="conformance.example",
        help="Relying party ID used in reference payloads",
    )
    parser.add_argument(
        "--commit",
        default="unknown",
        help="Commit of this tool, recorded in the JSON report",
    )
    parser.add_argument(
        "--date",
        default=datetime.date.today().isoformat(),
        help="Date recorded in the JSON report (default: today)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Path for the JSON report",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Print the report without ANSI colors",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    tracker = DeviceTracker(sink=StreamSink(colored=not args.no_color))
    exit_code = asyncio.run(
        run(
            device_key=args.device,
            device_config_json=args.device_config,
            tracker=tracker,
            definitions=default_suite(args.rp_id),
        )
    )

    tracker.report_findings()
    if args.output:
        write_results(args.output, tracker.generate_results_json(args.commit, args.date))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
