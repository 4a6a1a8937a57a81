"""Wizard flow and section configurators.

This module contains the configuration session logic:
- wizard: Deployment/configuration mode state machine
- sections: Resolve-or-ask section configurators
- summary: Applied-sections report
"""

from chartwizard.configuration.sections import (
    BranchConfigurator,
    DockerConfigurator,
    IngressConfigurator,
    ResolveOrAsk,
    SaaSConfigurator,
)
from chartwizard.configuration.summary import SummaryReporter, format_configuration_summary
from chartwizard.configuration.wizard import ConfigurationMode, ConfigurationWizard

__all__ = [
    # Wizard
    "ConfigurationMode",
    "ConfigurationWizard",
    # Sections
    "BranchConfigurator",
    "DockerConfigurator",
    "IngressConfigurator",
    "ResolveOrAsk",
    "SaaSConfigurator",
    # Summary
    "SummaryReporter",
    "format_configuration_summary",
]
