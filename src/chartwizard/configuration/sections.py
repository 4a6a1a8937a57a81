"""Section configurators for the chart wizard.

Every section follows the same protocol, implemented once in ResolveOrAsk:

1. Resolve the current value from the effective values document, with a
   hardcoded fallback sentinel.
2. If the section is already configured (or always, for non-secret
   choices like branches), offer "keep current" or "update".
3. Keep reuses the current value; secrets that were only found in the
   document are re-entered. Update collects new values.

Each configurator records its section in the applied-sections ledger
exactly once per call.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from chartwizard.core.gateway import PromptGateway
from chartwizard.core.models import (
    ChartConfiguration,
    DeploymentMode,
    DockerRegistryConfig,
    IngressConfig,
    IngressType,
    NgrokConfig,
    SaaSConfig,
)
from chartwizard.core.resolver import resolve
from chartwizard.core.values_store import (
    INGRESS_TYPE_PATH,
    NGROK_DOMAIN_PATH,
    OSS_BRANCH_PATH,
    SAAS_BRANCH_PATH,
    ValuesStore,
    registry_path,
)
from chartwizard.exceptions import WizardError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fallback sentinels: a resolved value equal to its sentinel means "never configured"
DEFAULT_BRANCH = "main"
DEFAULT_REGISTRY_USERNAME = "default"
DEFAULT_REGISTRY_EMAIL = "default@example.com"
DEFAULT_INGRESS_TYPE = IngressType.LOCALHOST

INGRESS_DESCRIPTIONS = {
    IngressType.LOCALHOST: "Localhost (port-forward, local development)",
    IngressType.CLUSTER_IP: "ClusterIP (in-cluster access only)",
    IngressType.NODE_PORT: "NodePort (exposed on every node)",
    IngressType.NGROK: "Ngrok (public tunnel with your own domain)",
}


@contextmanager
def stage(name: str) -> Iterator[None]:
    """Relabel wizard errors raised inside the block with a stage name.

    Example:
        >>> with stage("branch configuration"):
        ...     pick_branch()  # InputFailed("x") becomes "branch configuration failed: x"
    """
    try:
        yield
    except WizardError as e:
        raise e.with_stage(name) from e


@dataclass(frozen=True)
class ResolveOrAsk:
    """Resolve-then-offer protocol shared by all section configurators.

    Attributes:
        path: Dotted path of the value in the values document
        fallback: Sentinel returned when the value is absent
        label: Label of the keep/update choice
        keep_option: Keep option text, formatted with {current}
        update_option: Update option text
    """

    path: str
    fallback: Any
    label: str
    keep_option: str
    update_option: str

    def current(self, document: dict[str, Any]) -> Any:
        return resolve(document, self.path, self.fallback)

    def is_configured(self, document: dict[str, Any]) -> bool:
        """True if the resolved value is non-empty and differs from its sentinel.

        Values of the wrong type resolve to the fallback, so they count as
        not configured.
        """
        value = self.current(document)
        return value is not None and value != "" and value != self.fallback

    def run(
        self,
        gateway: PromptGateway,
        document: dict[str, Any],
        keep: Callable[[Any], T],
        collect: Callable[[Any], T],
        offer_keep: Optional[bool] = None,
    ) -> T:
        """Offer keep/update and return the result of the chosen step.

        Args:
            gateway: Prompt gateway
            document: Effective values document
            keep: Builds the result from the current value
            collect: Prompts for new values; receives the current value for defaults
            offer_keep: Force (True) or suppress (False) the choice;
                default offers it only when already configured
        """
        current = self.current(document)
        if offer_keep is None:
            offer_keep = self.is_configured(document)

        if offer_keep:
            options = [self.keep_option.format(current=current), self.update_option]
            if gateway.select_one(self.label, options) == 0:
                logger.debug(f"Keeping current value of {self.path}")
                return keep(current)

        return collect(current)


def ask_branch(gateway: PromptGateway, document: dict[str, Any], path: str, title: str) -> str:
    """Offer to keep the current branch at path or enter a custom one.

    Custom input is pre-filled with the current branch. The answer is
    trimmed and returned as-is: an empty answer yields an empty string.
    """
    protocol = ResolveOrAsk(
        path=path,
        fallback=DEFAULT_BRANCH,
        label=f"{title} repository branch",
        keep_option="Keep '{current}' branch",
        update_option="Specify custom branch",
    )
    gateway.info(f"{title} Repository Branch Configuration (current: {protocol.current(document)})")

    def collect(current: str) -> str:
        with stage(f"{title} branch input"):
            return gateway.ask_text(f"Enter {title} repository branch name", default=current).strip()

    return protocol.run(gateway, document, keep=lambda current: current, collect=collect, offer_keep=True)


class BranchConfigurator:
    """Configures the OSS repository branch override."""

    def __init__(self, gateway: PromptGateway, store: ValuesStore):
        self.gateway = gateway
        self.store = store

    def configure(self, config: ChartConfiguration) -> None:
        document = self.store.effective_values(config)
        branch = ask_branch(self.gateway, document, OSS_BRANCH_PATH, "OSS tenant")
        config.set_branch(branch)


class DockerConfigurator:
    """Configures container registry credentials.

    SaaS deployments use GHCR, OSS deployments use Docker Hub. Passwords
    entered earlier in the same session are kept without re-entry;
    passwords only found in the values file are always asked again.
    """

    def __init__(self, gateway: PromptGateway, store: ValuesStore):
        self.gateway = gateway
        self.store = store

    def configure(self, config: ChartConfiguration) -> None:
        config.set_docker_registry(self.collect_credentials(config))

    def collect_credentials(self, config: ChartConfiguration) -> DockerRegistryConfig:
        """Prompt for registry credentials without recording them."""
        document = self.store.effective_values(config)
        prefix = registry_path(config.deployment_mode)
        name = "GHCR" if config.deployment_mode is DeploymentMode.SAAS else "Docker Hub"

        protocol = ResolveOrAsk(
            path=f"{prefix}.username",
            fallback=DEFAULT_REGISTRY_USERNAME,
            label=f"{name} credentials",
            keep_option=f"Keep existing {name} credentials ({{current}})",
            update_option=f"Update {name} credentials",
        )
        current_email = resolve(document, f"{prefix}.email", DEFAULT_REGISTRY_EMAIL) or DEFAULT_REGISTRY_EMAIL
        session = config.docker_registry

        self.gateway.info(f"{name} Registry Credentials Configuration")

        def keep(username: str) -> DockerRegistryConfig:
            if session is not None and session.username == username:
                return DockerRegistryConfig(username=username, password=session.password, email=current_email)
            with stage(f"{name} password input"):
                password = self.gateway.ask_masked(f"{name} Registry Password/Token (required)")
            return DockerRegistryConfig(username=username, password=password.strip(), email=current_email)

        def collect(username: str) -> DockerRegistryConfig:
            with stage(f"{name} credentials input"):
                username = self.gateway.ask_text(f"{name} Registry Username", default=username)
                password = self.gateway.ask_masked(f"{name} Registry Password/Token")
                email = self.gateway.ask_text(f"{name} Registry Email", default=current_email)
            return DockerRegistryConfig(
                username=username.strip(),
                password=password.strip(),
                email=email.strip(),
            )

        return protocol.run(self.gateway, document, keep=keep, collect=collect)


class IngressConfigurator:
    """Configures how the chart is exposed."""

    def __init__(self, gateway: PromptGateway, store: ValuesStore):
        self.gateway = gateway
        self.store = store

    def configure(self, config: ChartConfiguration) -> None:
        document = self.store.effective_values(config)
        protocol = ResolveOrAsk(
            path=INGRESS_TYPE_PATH,
            fallback=DEFAULT_INGRESS_TYPE.value,
            label="Ingress",
            keep_option="Keep '{current}' ingress",
            update_option="Choose ingress type",
        )
        current_domain = resolve(document, NGROK_DOMAIN_PATH, "")

        def keep(current: str) -> IngressConfig:
            ingress_type = IngressType(current)
            if ingress_type is not IngressType.NGROK:
                return IngressConfig(type=ingress_type)
            domain = current_domain
            with stage("Ngrok auth token input"):
                if not domain:
                    domain = self.gateway.ask_text("Ngrok domain").strip()
                token = self.gateway.ask_masked("Ngrok auth token (required)")
            return IngressConfig(type=ingress_type, ngrok_config=NgrokConfig(domain, token.strip()))

        def collect(current: str) -> IngressConfig:
            types = list(IngressType)
            idx = self.gateway.select_one("Ingress type", [INGRESS_DESCRIPTIONS[t] for t in types])
            ingress_type = types[idx]
            if ingress_type is not IngressType.NGROK:
                return IngressConfig(type=ingress_type)
            with stage("Ngrok settings input"):
                domain = self.gateway.ask_text("Ngrok domain", default=current_domain or None)
                token = self.gateway.ask_masked("Ngrok auth token")
            return IngressConfig(type=ingress_type, ngrok_config=NgrokConfig(domain.strip(), token.strip()))

        self.gateway.info(f"Ingress Configuration (current: {protocol.current(document)})")
        # Unknown ingress types in the document cannot be kept
        known = IngressType.from_value(protocol.current(document)) is not None
        config.set_ingress(protocol.run(self.gateway, document, keep=keep, collect=collect, offer_keep=known))


class SaaSConfigurator:
    """Collects SaaS repository access, GHCR credentials and branches.

    Runs in both configuration modes: the repository token and registry
    credentials cannot be defaulted. Branch choices are only prompted in
    interactive mode; default mode reuses the branches in the values file.
    """

    def __init__(self, gateway: PromptGateway, store: ValuesStore, docker: DockerConfigurator):
        self.gateway = gateway
        self.store = store
        self.docker = docker

    def configure(self, config: ChartConfiguration, interactive: bool) -> None:
        self.gateway.info("SaaS deployment requires additional access")

        with stage("repository password input"):
            repo_password = self.gateway.ask_masked("Read Contents token for SaaS repository")

        with stage("GHCR credentials configuration"):
            registry = self.docker.collect_credentials(config)

        document = self.store.effective_values(config)
        if interactive:
            with stage("SaaS branch configuration"):
                saas_branch = ask_branch(self.gateway, document, SAAS_BRANCH_PATH, "SaaS tenant")
            with stage("OSS branch configuration"):
                oss_branch = ask_branch(self.gateway, document, OSS_BRANCH_PATH, "OSS tenant")
        else:
            saas_branch = resolve(document, SAAS_BRANCH_PATH, DEFAULT_BRANCH)
            oss_branch = resolve(document, OSS_BRANCH_PATH, DEFAULT_BRANCH)

        config.set_saas(
            SaaSConfig(
                repository_password=repo_password.strip(),
                saas_branch=saas_branch.strip(),
                oss_branch=oss_branch.strip(),
            )
        )
        config.set_docker_registry(registry)
