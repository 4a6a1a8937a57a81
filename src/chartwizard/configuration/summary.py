"""Configuration summary rendering."""

from typing import Optional

from rich.console import Console

from chartwizard.core.models import (
    SECTION_BRANCH,
    SECTION_DEPLOYMENT,
    SECTION_DOCKER,
    SECTION_INGRESS,
    SECTION_SAAS,
    ChartConfiguration,
    IngressType,
)


def format_configuration_summary(config: ChartConfiguration) -> str:
    """Format the applied-sections ledger as review lines.

    Sections are rendered in ledger order, once per entry. Unknown section
    names and sections without data are skipped.

    Args:
        config: Configuration produced by the wizard

    Returns:
        Summary text, or an empty string when nothing was applied

    Examples:
        >>> from chartwizard.core.models import DeploymentMode
        >>> config = ChartConfiguration(base_values_path="helm-values.yaml")
        >>> format_configuration_summary(config)
        ''
        >>> config.set_deployment_mode(DeploymentMode.OSS)
        >>> print(format_configuration_summary(config))
        Configuration Summary:
        ✓ Deployment mode: OSS
    """
    if not config.applied_sections:
        return ""

    lines = ["Configuration Summary:"]

    for section in config.applied_sections:
        if section == SECTION_DEPLOYMENT and config.deployment_mode is not None:
            lines.append(f"✓ Deployment mode: {config.deployment_mode.value}")
        elif section == SECTION_SAAS and config.saas is not None:
            lines.append(
                f"✓ SaaS repository password configured "
                f"(SaaS branch: {config.saas.saas_branch}, OSS branch: {config.saas.oss_branch})"
            )
        elif section == SECTION_BRANCH and config.branch is not None:
            lines.append(f"✓ Branch updated: {config.branch}")
        elif section == SECTION_DOCKER and config.docker_registry is not None:
            lines.append(f"✓ Docker registry updated: {config.docker_registry.username}")
        elif section == SECTION_INGRESS and config.ingress is not None:
            lines.append(f"✓ Ingress type updated: {config.ingress.type.value}")
            ngrok = config.ingress.ngrok_config
            if config.ingress.type is IngressType.NGROK and ngrok is not None:
                lines.append(f"  - Ngrok domain: {ngrok.domain}")

    return "\n".join(lines)


class SummaryReporter:
    """Prints the configuration summary and output location to a console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show(self, config: ChartConfiguration) -> None:
        summary = format_configuration_summary(config)
        if not summary:
            return

        header, *lines = summary.split("\n")
        self.console.print(f"\n[blue]INFO[/blue] {header}\n")
        for line in lines:
            self.console.print(line, style="green", markup=False, highlight=False)
        if config.output_values_path:
            self.console.print(f"\nValues written to: {config.output_values_path}", markup=False, highlight=False)
        self.console.print()
