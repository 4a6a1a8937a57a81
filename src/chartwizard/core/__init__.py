"""Core building blocks for the configuration wizard.

This module contains the pieces the wizard is assembled from:
- models: Configuration data model and section ledger
- resolver: Fallback-safe lookups in nested values documents
- values_store: Loading, merging and writing Helm values
- gateway: Prompt gateway protocol and terminal implementation
"""

from chartwizard.core.gateway import PromptGateway, TerminalPromptGateway
from chartwizard.core.models import (
    ChartConfiguration,
    DeploymentMode,
    DockerRegistryConfig,
    IngressConfig,
    IngressType,
    NgrokConfig,
    SaaSConfig,
)
from chartwizard.core.resolver import resolve, split_path
from chartwizard.core.values_store import DEFAULT_VALUES_PATH, ValuesStore

__all__ = [
    # Models
    "ChartConfiguration",
    "DeploymentMode",
    "DockerRegistryConfig",
    "IngressConfig",
    "IngressType",
    "NgrokConfig",
    "SaaSConfig",
    # Resolver
    "resolve",
    "split_path",
    # Values store
    "DEFAULT_VALUES_PATH",
    "ValuesStore",
    # Gateway
    "PromptGateway",
    "TerminalPromptGateway",
]
