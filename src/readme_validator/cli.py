"""Command line entry point for readme-validator.

Validates a Terraform module README against the module's code and prints a
table of every problem found.

Exit codes:
    0: README is consistent with the module
    1: Validation errors were found
    2: Configuration error (no README, unreadable README, bad option)
"""

import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from readme_validator import __version__
from readme_validator.config_manager import ConfigManager
from readme_validator.errors import ConfigError, ValidationError
from readme_validator.modules.format_detector import MarkdownFormat
from readme_validator.modules.terraform_content import ScanMode
from readme_validator.validator import ReadmeValidator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VALIDATION_FAILED = 1
EXIT_CONFIG_ERROR = 2


class ReportDisplay:
    """Render validation results with rich."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def show(self, validator: ReadmeValidator, errors: list[ValidationError]) -> None:
        """Print a summary panel and, if there are errors, an error table."""
        detection = validator.markdown.detection
        format_line = f"Format: [cyan]{validator.format.value}[/cyan]"
        if detection is not None:
            format_line += (
                f" (detected, confidence {detection.confidence:.2f}; "
                f"table {detection.table_score}, heading {detection.heading_score})"
            )

        if errors:
            status = f"[red]{len(errors)} problem(s) found[/red]"
        else:
            status = "[green]README is consistent with the module[/green]"

        summary = "\n".join(
            [
                f"README: {escape(str(validator.readme_path))}",
                f"Module: {escape(str(validator.module_path))}",
                format_line,
                status,
            ]
        )
        self.console.print(
            Panel(summary, title="readme-validator", border_style="cyan", padding=(1, 2))
        )

        if not errors:
            return

        table = Table(show_header=True, header_style="bold", border_style="dim")
        table.add_column("#", justify="right", width=4)
        table.add_column("Kind", style="yellow", width=22)
        table.add_column("Problem", style="white")
        for index, error in enumerate(errors, 1):
            table.add_row(str(index), error.kind.value, escape(error.message))
        self.console.print(table)


@click.command(name="readme-validator")
@click.option("--readme", "readme_path", type=click.Path(), help="README to validate.")
@click.option("--module-path", type=click.Path(), help="Module directory (default: README dir).")
@click.option(
    "--format",
    "format_",
    type=click.Choice([f.value for f in MarkdownFormat], case_sensitive=False),
    help="Documentation layout (default: auto).",
)
@click.option(
    "--provider-prefix",
    "provider_prefixes",
    multiple=True,
    help="Resource prefix to recognize, e.g. azurerm_. Repeatable.",
)
@click.option("--section", "sections", multiple=True, help="Additional required section.")
@click.option("--file", "files", multiple=True, help="Additional required file.")
@click.option(
    "--scan-mode",
    type=click.Choice([m.value for m in ScanMode], case_sensitive=False),
    help="Terraform layout: module directory or caller workspace.",
)
@click.option("--config", "config_path", type=click.Path(), help="TOML config file.")
@click.option("--skip-sections", is_flag=True, default=None, help="Skip section checks.")
@click.option("--skip-files", is_flag=True, default=None, help="Skip required file checks.")
@click.option("--skip-urls", is_flag=True, default=None, help="Skip URL reachability checks.")
@click.option("--skip-resources", is_flag=True, default=None, help="Skip resource checks.")
@click.option("--skip-variables", is_flag=True, default=None, help="Skip variable checks.")
@click.option("--skip-outputs", is_flag=True, default=None, help="Skip output checks.")
@click.option("--fail-fast", is_flag=True, help="Stop at the first error.")
@click.option("--verbose", "-v", is_flag=True, default=None, help="Enable debug logging.")
@click.version_option(version=__version__)
def main(
    readme_path: str | None,
    module_path: str | None,
    format_: str | None,
    provider_prefixes: tuple[str, ...],
    sections: tuple[str, ...],
    files: tuple[str, ...],
    scan_mode: str | None,
    config_path: str | None,
    skip_sections: bool | None,
    skip_files: bool | None,
    skip_urls: bool | None,
    skip_resources: bool | None,
    skip_variables: bool | None,
    skip_outputs: bool | None,
    fail_fast: bool,
    verbose: bool | None,
):
    """Check that a Terraform module README documents the module's code.

    Compares resources, data sources, variables, and outputs declared in the
    module with those listed in the README, and checks required sections,
    files, and links.

    \b
    EXAMPLES:
        # Validate a module README
        readme-validator --readme modules/network/README.md --provider-prefix azurerm_

        # Table-style README, skip network checks
        readme-validator --readme README.md --format table --skip-urls

        # Use README_PATH from the environment
        README_PATH=README.md readme-validator --provider-prefix azurerm_
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format="%(message)s"
    )

    try:
        options = ConfigManager.resolve(
            config_path=config_path,
            readme_path=readme_path,
            module_path=module_path,
            format=format_,
            provider_prefixes=list(provider_prefixes) or None,
            additional_sections=list(sections) or None,
            additional_files=list(files) or None,
            scan_mode=scan_mode,
            verbose=verbose,
            skip_sections=skip_sections,
            skip_files=skip_files,
            skip_urls=skip_urls,
            skip_resources=skip_resources,
            skip_variables=skip_variables,
            skip_outputs=skip_outputs,
        )
        if options.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        validator = ReadmeValidator(options)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if fail_fast:
        first = validator.validate_fail_fast()
        errors = [first] if first is not None else []
    else:
        errors = validator.validate()

    ReportDisplay().show(validator, errors)
    sys.exit(EXIT_VALIDATION_FAILED if errors else EXIT_OK)


if __name__ == "__main__":
    main()
