"""Configuration data model for the chart wizard.

This module defines the deployment and ingress enums, the per-section
records collected by the configurators, and ChartConfiguration, the
mutable object that accumulates choices during one wizard session.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

# Section names recorded in the applied-sections ledger
SECTION_DEPLOYMENT = "deployment"
SECTION_SAAS = "saas"
SECTION_BRANCH = "branch"
SECTION_DOCKER = "docker"
SECTION_INGRESS = "ingress"


class DeploymentMode(Enum):
    """Deployment topology of the chart.

    Values are the human-readable names used in prompts and the summary.
    """

    OSS = "OSS"
    SAAS = "SaaS"

    @property
    def values_key(self) -> str:
        """Key of this mode's subtree under ``deployment`` in the values document.

        Example:
            >>> DeploymentMode.SAAS.values_key
            'saas'
        """
        return self.name.lower()


class IngressType(Enum):
    """Ingress exposure types supported by the chart."""

    LOCALHOST = "localhost"
    CLUSTER_IP = "ClusterIP"
    NODE_PORT = "NodePort"
    NGROK = "Ngrok"

    @classmethod
    def from_value(cls, value: Any) -> Optional["IngressType"]:
        """Return the IngressType matching a document value, or None if unknown."""
        for member in cls:
            if member.value == value:
                return member
        return None


@dataclass
class SaaSConfig:
    """SaaS tenant access settings.

    Attributes:
        repository_password: Read token for the SaaS repository (secret)
        saas_branch: SaaS tenant repository branch
        oss_branch: OSS tenant repository branch deployed alongside SaaS
    """

    repository_password: str
    saas_branch: str
    oss_branch: str


@dataclass
class DockerRegistryConfig:
    """Container registry credentials.

    Written under ``registry.ghcr`` in SaaS mode and ``registry.docker``
    in OSS mode.
    """

    username: str
    password: str
    email: str


@dataclass
class NgrokConfig:
    """Ngrok tunnel settings (domain is public, auth_token is secret)."""

    domain: str
    auth_token: str = ""


@dataclass
class IngressConfig:
    type: IngressType
    ngrok_config: Optional[NgrokConfig] = None


@dataclass
class ChartConfiguration:
    """Accumulating result of one wizard session.

    Created empty when the base values are loaded, mutated in sequence by
    the wizard and its section configurators, then consumed once by
    materialization and the summary.

    Attributes:
        base_values_path: Path of the values document that was read
        existing_values: Nested values document loaded from base_values_path
        deployment_mode: Chosen topology (required before materialization)
        saas: SaaS access settings (SaaS mode only)
        docker_registry: Registry credentials
        branch: OSS branch override
        ingress: Ingress settings
        applied_sections: Ordered ledger of configured sections
        output_values_path: Path of the written values file (set once, after the write)

    Example:
        >>> config = ChartConfiguration(base_values_path="helm-values.yaml")
        >>> config.set_branch("release-1")
        >>> config.applied_sections
        ['branch']
    """

    base_values_path: str
    existing_values: dict[str, Any] = field(default_factory=dict)
    deployment_mode: Optional[DeploymentMode] = None
    saas: Optional[SaaSConfig] = None
    docker_registry: Optional[DockerRegistryConfig] = None
    branch: Optional[str] = None
    ingress: Optional[IngressConfig] = None
    applied_sections: list[str] = field(default_factory=list)
    output_values_path: Optional[str] = None

    # Each setter stores the data and records exactly one ledger entry,
    # so a section is never reported without a value.

    def set_deployment_mode(self, mode: DeploymentMode) -> None:
        self.deployment_mode = mode
        self.applied_sections.append(SECTION_DEPLOYMENT)

    def set_saas(self, saas: SaaSConfig) -> None:
        self.saas = saas
        self.applied_sections.append(SECTION_SAAS)

    def set_docker_registry(self, registry: DockerRegistryConfig) -> None:
        self.docker_registry = registry
        self.applied_sections.append(SECTION_DOCKER)

    def set_branch(self, branch: str) -> None:
        self.branch = branch
        self.applied_sections.append(SECTION_BRANCH)

    def set_ingress(self, ingress: IngressConfig) -> None:
        self.ingress = ingress
        self.applied_sections.append(SECTION_INGRESS)

    def section_data(self, section: str) -> Any:
        """Return the data recorded for a ledger section name (None if unknown or unset)."""
        return {
            SECTION_DEPLOYMENT: self.deployment_mode,
            SECTION_SAAS: self.saas,
            SECTION_BRANCH: self.branch,
            SECTION_DOCKER: self.docker_registry,
            SECTION_INGRESS: self.ingress,
        }.get(section)
