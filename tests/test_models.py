"""Tests for the configuration data model and error taxonomy."""

import pytest

from chartwizard.core.models import (
    ChartConfiguration,
    DeploymentMode,
    DockerRegistryConfig,
    IngressConfig,
    IngressType,
    NgrokConfig,
    SaaSConfig,
)
from chartwizard.exceptions import InputAborted, InputFailed, MergeFailed, WizardError, WriteFailed


@pytest.fixture
def config():
    """Empty configuration."""
    return ChartConfiguration(base_values_path="helm-values.yaml")


class TestDeploymentMode:
    """Test suite for DeploymentMode enum."""

    def test_values_key(self):
        """Each mode maps to its subtree under deployment."""
        assert DeploymentMode.OSS.values_key == "oss"
        assert DeploymentMode.SAAS.values_key == "saas"

    def test_display_value(self):
        assert DeploymentMode.SAAS.value == "SaaS"


class TestIngressType:
    """Test suite for IngressType enum."""

    def test_from_value_known(self):
        assert IngressType.from_value("Ngrok") is IngressType.NGROK

    def test_from_value_unknown(self):
        """Unknown document values map to None instead of raising."""
        assert IngressType.from_value("traefik") is None
        assert IngressType.from_value(None) is None


class TestChartConfiguration:
    """Test suite for ChartConfiguration ledger invariants."""

    def test_starts_empty(self, config):
        assert config.applied_sections == []
        assert config.deployment_mode is None
        assert config.output_values_path is None

    def test_each_setter_records_one_entry(self, config):
        """Every setter stores data and appends exactly one ledger entry."""
        config.set_deployment_mode(DeploymentMode.SAAS)
        config.set_saas(SaaSConfig("token", "dev", "main"))
        config.set_docker_registry(DockerRegistryConfig("octocat", "pw", "o@example.com"))
        config.set_branch("rel-1")
        config.set_ingress(IngressConfig(IngressType.NGROK, NgrokConfig("demo.ngrok.app")))

        assert config.applied_sections == ["deployment", "saas", "docker", "branch", "ingress"]

    def test_ledger_matches_data(self, config):
        """Every recorded section has data."""
        config.set_deployment_mode(DeploymentMode.OSS)
        config.set_branch("rel-1")

        for section in config.applied_sections:
            assert config.section_data(section) is not None

    def test_duplicates_are_kept(self, config):
        """Configuring a section twice records it twice."""
        config.set_branch("a")
        config.set_branch("b")
        assert config.applied_sections == ["branch", "branch"]
        assert config.branch == "b"

    def test_section_data_unknown(self, config):
        assert config.section_data("telemetry") is None


class TestWizardErrors:
    """Test suite for error stage labelling."""

    @pytest.mark.parametrize("error_class", [InputAborted, InputFailed, MergeFailed, WriteFailed])
    def test_with_stage_keeps_class(self, error_class):
        """Relabelled errors keep their concrete class."""
        wrapped = error_class("boom").with_stage("ingress configuration")

        assert type(wrapped) is error_class
        assert str(wrapped) == "ingress configuration failed: boom"

    def test_with_stage_nests(self):
        """Stages compose outermost-first."""
        error = InputAborted("cancelled").with_stage("GHCR credentials configuration").with_stage("SaaS configuration")
        assert str(error) == "SaaS configuration failed: GHCR credentials configuration failed: cancelled"

    def test_with_stage_preserves_root_cause(self):
        cause = OSError("tty gone")
        error = InputFailed("read failed", original_error=cause).with_stage("branch configuration")
        assert error.original_error is cause

    def test_with_stage_keeps_original_instance(self):
        """The original error is not modified."""
        error = MergeFailed("bad shape")
        error.with_stage("loading base values")
        assert str(error) == "bad shape"

    def test_write_failed_directory_context(self):
        error = WriteFailed("disk full", directory="/tmp/out").with_stage("creating temporary values file")
        assert str(error) == "creating temporary values file failed: disk full (in directory: /tmp/out)"
        assert error.directory == "/tmp/out"

    def test_all_errors_share_base(self):
        assert issubclass(InputAborted, WizardError)
        assert issubclass(WriteFailed, WizardError)
