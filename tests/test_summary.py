"""Tests for the configuration summary."""

import io

import pytest
from rich.console import Console

from chartwizard.configuration.summary import SummaryReporter, format_configuration_summary
from chartwizard.core.models import (
    ChartConfiguration,
    DeploymentMode,
    DockerRegistryConfig,
    IngressConfig,
    IngressType,
    NgrokConfig,
    SaaSConfig,
)


@pytest.fixture
def config():
    return ChartConfiguration(base_values_path="helm-values.yaml")


class TestFormatConfigurationSummary:
    """Test suite for format_configuration_summary."""

    def test_empty_ledger(self, config):
        assert format_configuration_summary(config) == ""

    def test_full_saas_session(self, config):
        config.set_deployment_mode(DeploymentMode.SAAS)
        config.set_saas(SaaSConfig("token", "dev", "rel-1"))
        config.set_docker_registry(DockerRegistryConfig("octocat", "pw", "o@example.com"))
        config.set_branch("rel-1")
        config.set_ingress(IngressConfig(IngressType.NGROK, NgrokConfig("demo.ngrok.app", "tok")))

        assert format_configuration_summary(config).split("\n") == [
            "Configuration Summary:",
            "✓ Deployment mode: SaaS",
            "✓ SaaS repository password configured (SaaS branch: dev, OSS branch: rel-1)",
            "✓ Docker registry updated: octocat",
            "✓ Branch updated: rel-1",
            "✓ Ingress type updated: Ngrok",
            "  - Ngrok domain: demo.ngrok.app",
        ]

    def test_secrets_never_rendered(self, config):
        config.set_deployment_mode(DeploymentMode.SAAS)
        config.set_saas(SaaSConfig("repo-secret", "dev", "main"))
        config.set_docker_registry(DockerRegistryConfig("octocat", "registry-secret", "o@example.com"))

        summary = format_configuration_summary(config)
        assert "repo-secret" not in summary
        assert "registry-secret" not in summary

    def test_ledger_order_and_duplicates(self, config):
        """Lines follow ledger order; duplicate entries render again."""
        config.set_branch("a")
        config.set_deployment_mode(DeploymentMode.OSS)
        config.applied_sections.append("branch")

        assert format_configuration_summary(config).split("\n")[1:] == [
            "✓ Branch updated: a",
            "✓ Deployment mode: OSS",
            "✓ Branch updated: a",
        ]

    def test_unknown_sections_skipped(self, config):
        config.set_deployment_mode(DeploymentMode.OSS)
        config.applied_sections.append("telemetry")

        assert format_configuration_summary(config) == "Configuration Summary:\n✓ Deployment mode: OSS"

    def test_non_ngrok_ingress_has_no_domain_line(self, config):
        config.set_ingress(IngressConfig(IngressType.CLUSTER_IP))
        assert "Ngrok domain" not in format_configuration_summary(config)


class TestSummaryReporter:
    """Test suite for SummaryReporter."""

    def render(self, config):
        console = Console(file=io.StringIO(), width=200)
        SummaryReporter(console).show(config)
        return console.file.getvalue()

    def test_prints_nothing_for_empty_ledger(self, config):
        assert self.render(config) == ""

    def test_prints_lines_and_output_path(self, config):
        config.set_branch("feature/[x]")
        config.output_values_path = "/work/helm-values-abc.yaml"

        output = self.render(config)
        assert "Configuration Summary:" in output
        assert "✓ Branch updated: feature/[x]" in output
        assert "Values written to: /work/helm-values-abc.yaml" in output
