"""Command-line entry point for the chart configuration wizard.

Usage:
    chartwizard                          # Read ./helm-values.yaml, write a new values file here
    chartwizard --values path/to/values.yaml --output-dir build/
    chartwizard --verbose                # Debug logging to stderr
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console

from chartwizard.configuration.summary import SummaryReporter
from chartwizard.configuration.wizard import ConfigurationWizard
from chartwizard.core.gateway import TerminalPromptGateway
from chartwizard.core.values_store import DEFAULT_VALUES_PATH, ValuesStore
from chartwizard.exceptions import InputAborted, WizardError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ABORTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chartwizard",
        description="Interactively build a Helm values file for an OSS or SaaS deployment.",
    )
    parser.add_argument(
        "--values",
        default=str(DEFAULT_VALUES_PATH),
        help=f"Existing values file to start from (default: {DEFAULT_VALUES_PATH})",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the generated values file (default: current directory)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run the wizard and return a process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[chartwizard] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    console = Console()
    store = ValuesStore(base_path=args.values, output_dir=args.output_dir)
    wizard = ConfigurationWizard(
        TerminalPromptGateway(console),
        store=store,
        reporter=SummaryReporter(console),
    )

    try:
        config = wizard.configure_helm_values()
    except InputAborted as e:
        logger.debug(f"Session aborted: {e}")
        console.print("\n[yellow]Aborted.[/yellow] No values file was written.")
        return EXIT_ABORTED
    except WizardError as e:
        console.print(f"[red]Error:[/red] {e}", highlight=False)
        return EXIT_FAILED

    wizard.show_configuration_summary(config)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
