"""
chartwizard - interactive Helm values configuration wizard.

Package structure:
- chartwizard.core: Data model, field resolver, values store, prompt gateway
- chartwizard.configuration: Wizard state machine, section configurators, summary
- chartwizard.cli: Command-line entry point

Public API:
- ConfigurationWizard: Runs a configuration session
- ChartConfiguration: Result of a session
- ValuesStore: Loads, merges and writes values documents
- resolve(): Fallback-safe nested lookup
"""

from chartwizard.configuration.wizard import ConfigurationWizard
from chartwizard.core.models import ChartConfiguration, DeploymentMode
from chartwizard.core.resolver import resolve
from chartwizard.core.values_store import ValuesStore

__version__ = "0.1.0"

__all__ = [
    "ConfigurationWizard",
    "ChartConfiguration",
    "DeploymentMode",
    "ValuesStore",
    "resolve",
]
