"""Chart configuration wizard.

Drives one session through a fixed sequence of states:

    select deployment mode -> select configuration mode
        -> apply defaults | apply interactive -> materialize -> done

There are no backward transitions. A cancel at any prompt raises
InputAborted out of the session before anything is written; every other
failure is relabelled with the failing stage and re-raised.
"""

import logging
from enum import Enum
from typing import Optional

from chartwizard.core.gateway import PromptGateway
from chartwizard.core.models import ChartConfiguration, DeploymentMode
from chartwizard.core.values_store import ValuesStore

from .sections import (
    BranchConfigurator,
    DockerConfigurator,
    IngressConfigurator,
    SaaSConfigurator,
    stage,
)
from .summary import SummaryReporter

logger = logging.getLogger(__name__)

DEPLOYMENT_MODE_OPTIONS = [
    "OSS Tenant deployment (Default self-hosted version)",
    "SaaS Tenant deployment",
]

CONFIGURATION_MODE_OPTIONS = [
    "Default configuration",
    "Interactive configuration",
]


class ConfigurationMode(Enum):
    """Whether section configurators prompt (interactive) or are skipped (defaults)."""

    DEFAULTS = "default"
    INTERACTIVE = "interactive"


class ConfigurationWizard:
    """Builds a Helm values file from user choices and existing values.

    Example:
        >>> from chartwizard.core.gateway import TerminalPromptGateway
        >>> wizard = ConfigurationWizard(TerminalPromptGateway())
        >>> config = wizard.configure_helm_values()
        >>> wizard.show_configuration_summary(config)
    """

    def __init__(
        self,
        gateway: PromptGateway,
        store: Optional[ValuesStore] = None,
        reporter: Optional[SummaryReporter] = None,
    ):
        """Initialize the wizard and its section configurators.

        Args:
            gateway: Prompt gateway used for every question
            store: Values store (default: helm-values.yaml in the working directory)
            reporter: Summary reporter (default: prints to the terminal)
        """
        self.gateway = gateway
        self.store = store or ValuesStore()
        self.reporter = reporter or SummaryReporter()
        self.branch_config = BranchConfigurator(gateway, self.store)
        self.docker_config = DockerConfigurator(gateway, self.store)
        self.ingress_config = IngressConfigurator(gateway, self.store)
        self.saas_config = SaaSConfigurator(gateway, self.store, self.docker_config)

    def configure_helm_values(self) -> ChartConfiguration:
        """Run a full session and return the materialized configuration.

        Raises:
            InputAborted: If the user cancels any prompt
            InputFailed: If a prompt cannot be read
            MergeFailed: If the values cannot be loaded or merged
            WriteFailed: If the output file cannot be written
        """
        deployment_mode = self.select_deployment_mode()
        configuration_mode = self.select_configuration_mode()

        if configuration_mode is ConfigurationMode.DEFAULTS:
            return self.configure_with_defaults(deployment_mode)
        return self.configure_interactive(deployment_mode)

    def select_deployment_mode(self) -> DeploymentMode:
        self.gateway.info("Select your deployment mode:")
        with stage("deployment mode selection"):
            idx = self.gateway.select_one("Deployment Mode", DEPLOYMENT_MODE_OPTIONS)
        return DeploymentMode.OSS if idx == 0 else DeploymentMode.SAAS

    def select_configuration_mode(self) -> ConfigurationMode:
        self.gateway.info("How would you like to configure your chart installation?")
        with stage("configuration mode selection"):
            idx = self.gateway.select_one("Configuration Mode", CONFIGURATION_MODE_OPTIONS)
        return ConfigurationMode.DEFAULTS if idx == 0 else ConfigurationMode.INTERACTIVE

    def configure_with_defaults(self, deployment_mode: DeploymentMode) -> ChartConfiguration:
        """Apply the default configuration for a deployment mode.

        Only SaaS access (token, registry credentials) is prompted; branches
        are taken from the existing values.
        """
        self.gateway.info(f"Using default configuration for {deployment_mode.value} deployment")
        logger.debug(f"Defaults path for {deployment_mode.value}")

        config = self.load_base_values()
        config.set_deployment_mode(deployment_mode)

        if deployment_mode is DeploymentMode.SAAS:
            with stage("SaaS configuration"):
                self.saas_config.configure(config, interactive=False)

        self.materialize(config)
        return config

    def configure_interactive(self, deployment_mode: DeploymentMode) -> ChartConfiguration:
        """Run every section configurator in order: SaaS (if SaaS), branch, docker, ingress."""
        self.gateway.info(f"Configuring Helm values for {deployment_mode.value} deployment")
        logger.debug(f"Interactive path for {deployment_mode.value}")

        config = self.load_base_values()
        config.set_deployment_mode(deployment_mode)

        if deployment_mode is DeploymentMode.SAAS:
            with stage("SaaS configuration"):
                self.saas_config.configure(config, interactive=True)

        with stage("branch configuration"):
            self.branch_config.configure(config)

        with stage("docker registry configuration"):
            self.docker_config.configure(config)

        with stage("ingress configuration"):
            self.ingress_config.configure(config)

        self.materialize(config)
        return config

    def load_base_values(self) -> ChartConfiguration:
        """Load base values from the store into a new, empty configuration."""
        with stage("loading base values"):
            values = self.store.load_or_create()
        return ChartConfiguration(
            base_values_path=str(self.store.base_path),
            existing_values=values,
        )

    def materialize(self, config: ChartConfiguration) -> None:
        with stage("creating temporary values file"):
            self.store.materialize(config)
        logger.info(f"Sections applied: {', '.join(config.applied_sections)}")

    def show_configuration_summary(self, config: ChartConfiguration) -> None:
        self.reporter.show(config)
