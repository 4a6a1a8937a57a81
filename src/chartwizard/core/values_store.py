"""Helm values document loading, merging and writing.

Loads the base values document (or a built-in default), merges a
ChartConfiguration into it at canonical paths, checks required keys, and
writes the result to a new file. The base document is never opened for
writing.
"""

import copy
import logging
import os
import sys
import tempfile
from collections.abc import Mapping
from contextlib import suppress
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from chartwizard.exceptions import MergeFailed, WriteFailed

from .models import ChartConfiguration, DeploymentMode, IngressType
from .resolver import PathLike, resolve, split_path

logger = logging.getLogger(__name__)

# Base values file, relative to the working directory
DEFAULT_VALUES_PATH = Path("helm-values.yaml")

# Output files hold secrets: owner read/write only (Unix only)
OUTPUT_FILE_PERMS = 0o600

# Used when no base values file exists
DEFAULT_VALUES: dict[str, Any] = {
    "deployment": {
        "oss": {
            "enabled": True,
            "repository": {
                "branch": "main",
            },
        },
    },
}

# Canonical paths
OSS_BRANCH_PATH = "deployment.oss.repository.branch"
SAAS_BRANCH_PATH = "deployment.saas.repository.branch"
SAAS_PASSWORD_PATH = "deployment.saas.repository.password"
INGRESS_TYPE_PATH = "ingress.type"
NGROK_DOMAIN_PATH = "ingress.ngrok.domain"
NGROK_AUTH_TOKEN_PATH = "ingress.ngrok.authToken"


def registry_path(mode: Optional[DeploymentMode]) -> str:
    """Registry credentials path for a deployment mode.

    SaaS pulls private images from GHCR; OSS uses Docker Hub credentials.

    Examples:
        >>> registry_path(DeploymentMode.SAAS)
        'registry.ghcr'
        >>> registry_path(DeploymentMode.OSS)
        'registry.docker'
    """
    return "registry.ghcr" if mode is DeploymentMode.SAAS else "registry.docker"


def mode_enabled_path(mode: DeploymentMode) -> str:
    return f"deployment.{mode.values_key}.enabled"


def safe_chmod(path: Path, mode: int) -> None:
    """Set file permissions (Unix only).

    On Windows, no-op (ACLs control permissions).
    """
    if sys.platform != "win32":
        with suppress(OSError, NotImplementedError):
            path.chmod(mode)


def set_path(document: dict[str, Any], path: PathLike, value: Any) -> None:
    """Set value at path, creating intermediate mappings as needed.

    Args:
        document: Mapping to modify in place
        path: Dotted path or sequence of keys
        value: Value to store at the terminal key

    Raises:
        MergeFailed: If an intermediate key holds a non-mapping value

    Example:
        >>> doc = {"registry": {"docker": {"username": "old"}}}
        >>> set_path(doc, "registry.docker.username", "new")
        >>> doc["registry"]["docker"]["username"]
        'new'
    """
    keys = split_path(path)
    if not keys:
        raise MergeFailed("cannot set a value at an empty path")

    current = document
    for depth, key in enumerate(keys[:-1]):
        child = current.get(key)
        if child is None:
            child = {}
            current[key] = child
        elif not isinstance(child, dict):
            where = ".".join(keys[: depth + 1])
            raise MergeFailed(
                f"cannot set {'.'.join(keys)}: {where} is a {type(child).__name__}, not a mapping"
            )
        current = child
    current[keys[-1]] = value


class ValuesStore:
    """Reads and writes Helm values documents.

    Example:
        >>> store = ValuesStore()
        >>> values = store.load_or_create()
        >>> config = ChartConfiguration(str(store.base_path), existing_values=values)
        >>> config.set_deployment_mode(DeploymentMode.OSS)
        >>> output = store.materialize(config)
    """

    def __init__(
        self,
        base_path: Union[str, Path] = DEFAULT_VALUES_PATH,
        output_dir: Optional[Union[str, Path]] = None,
    ):
        """Initialize ValuesStore.

        Args:
            base_path: Values document to read (default: helm-values.yaml)
            output_dir: Directory for output files (default: working directory)
        """
        self.base_path = Path(base_path)
        self.output_dir = Path(output_dir) if output_dir is not None else None

    def load_or_create(self) -> dict[str, Any]:
        """Load the base values document, or return a default one if absent.

        Returns:
            Parsed values (a fresh copy of DEFAULT_VALUES if the file is missing)

        Raises:
            MergeFailed: If the file exists but is unreadable, not valid YAML,
                or not a mapping at the top level
        """
        if not self.base_path.exists():
            logger.info(f"No values file at {self.base_path}, using defaults")
            return copy.deepcopy(DEFAULT_VALUES)

        try:
            with self.base_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise MergeFailed(f"invalid YAML in {self.base_path}", original_error=e) from e
        except OSError as e:
            raise MergeFailed(f"cannot read {self.base_path}: {e}", original_error=e) from e

        if data is None:
            logger.warning(f"Values file {self.base_path} is empty")
            return {}
        if not isinstance(data, dict):
            raise MergeFailed(f"{self.base_path} must contain a mapping, got {type(data).__name__}")

        logger.debug(f"Loaded values from {self.base_path}")
        return data

    def apply_configuration(self, document: dict[str, Any], config: ChartConfiguration) -> None:
        """Merge every set field of config into document, in place.

        Only the canonical paths of set fields are written; all other
        paths keep their values. The OSS branch override is applied after
        the SaaS settings, so the later choice wins.

        Raises:
            MergeFailed: If a canonical path runs through a scalar value
        """
        mode = config.deployment_mode
        if mode is not None:
            set_path(document, mode_enabled_path(mode), True)
            for other in DeploymentMode:
                if other is not mode and isinstance(resolve(document, f"deployment.{other.values_key}"), Mapping):
                    set_path(document, mode_enabled_path(other), False)

        if config.saas is not None:
            set_path(document, SAAS_PASSWORD_PATH, config.saas.repository_password)
            set_path(document, SAAS_BRANCH_PATH, config.saas.saas_branch)
            set_path(document, OSS_BRANCH_PATH, config.saas.oss_branch)

        if config.docker_registry is not None:
            prefix = registry_path(mode)
            set_path(document, f"{prefix}.username", config.docker_registry.username)
            set_path(document, f"{prefix}.password", config.docker_registry.password)
            set_path(document, f"{prefix}.email", config.docker_registry.email)

        if config.branch is not None:
            set_path(document, OSS_BRANCH_PATH, config.branch)

        if config.ingress is not None:
            set_path(document, INGRESS_TYPE_PATH, config.ingress.type.value)
            ngrok = config.ingress.ngrok_config
            if config.ingress.type is IngressType.NGROK and ngrok is not None:
                set_path(document, NGROK_DOMAIN_PATH, ngrok.domain)
                set_path(document, NGROK_AUTH_TOKEN_PATH, ngrok.auth_token)

    def effective_values(self, config: ChartConfiguration) -> dict[str, Any]:
        """Return a copy of the existing values with config applied so far.

        Configurators read current values from this view, so a later step
        sees what an earlier step collected. A malformed document degrades
        to the unmodified copy here; the final merge reports it instead.
        """
        document = copy.deepcopy(config.existing_values)
        try:
            self.apply_configuration(document, config)
        except MergeFailed as e:
            logger.warning(f"Reading values without pending changes: {e}")
            return copy.deepcopy(config.existing_values)
        return document

    def validate_values(self, document: dict[str, Any], config: ChartConfiguration) -> list[str]:
        """Check that the keys required by the chosen configuration are present.

        Args:
            document: Merged values document
            config: Configuration that was applied

        Returns:
            List of missing keys (empty if valid)

        Checks:
            - Deployment mode is set and its enabled flag is true
            - SaaS mode: repository password and branch, OSS branch, GHCR credentials
            - Ngrok ingress: ngrok domain
        """
        errors: list[str] = []

        mode = config.deployment_mode
        if mode is None:
            errors.append("deployment mode must be selected")
            return errors

        if resolve(document, mode_enabled_path(mode), False) is not True:
            errors.append(f"{mode_enabled_path(mode)} must be true")

        required: list[str] = []
        if mode is DeploymentMode.SAAS:
            required += [SAAS_PASSWORD_PATH, SAAS_BRANCH_PATH, OSS_BRANCH_PATH]
            prefix = registry_path(mode)
            required += [f"{prefix}.username", f"{prefix}.password"]
        if config.ingress is not None and config.ingress.type is IngressType.NGROK:
            required.append(NGROK_DOMAIN_PATH)

        for path in required:
            value = resolve(document, path)
            # An empty ngrok domain counts as missing
            if value is None or (path == NGROK_DOMAIN_PATH and value == ""):
                errors.append(f"{path} required")

        return errors

    def write_temp(self, document: dict[str, Any]) -> Path:
        """Write document to a newly created file and return its path.

        The output name is reserved first, the document is written next to
        it under a ``.tmp`` name, and the complete file is renamed over the
        reservation. Neither name can collide with an existing file, so
        nothing is ever overwritten and no partial file exists at the
        returned path.

        Raises:
            WriteFailed: If the file cannot be created or serialized
        """
        directory = self.output_dir if self.output_dir is not None else Path.cwd()

        try:
            fd, final_name = tempfile.mkstemp(prefix="helm-values-", suffix=".yaml", dir=directory)
            os.close(fd)
        except OSError as e:
            raise WriteFailed(f"cannot create output file: {e}", original_error=e, directory=str(directory)) from e

        final_path = Path(final_name)
        temp_path = final_path.with_name(final_path.name + ".tmp")
        created = False

        try:
            fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, OUTPUT_FILE_PERMS)
            created = True
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    document,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    allow_unicode=True,
                )

            safe_chmod(temp_path, OUTPUT_FILE_PERMS)

            temp_path.replace(final_path)
        except (OSError, yaml.YAMLError) as e:
            if created:
                with suppress(FileNotFoundError):
                    temp_path.unlink()
            with suppress(FileNotFoundError):
                final_path.unlink()
            raise WriteFailed(f"cannot write output file: {e}", original_error=e, directory=str(directory)) from e

        logger.info(f"Values written to {final_path}")
        return final_path

    def materialize(self, config: ChartConfiguration) -> Path:
        """Merge config into its existing values and write the result.

        On success the merged document replaces config.existing_values and
        config.output_values_path is set. On failure config is unchanged.

        Raises:
            MergeFailed: If the merge fails or required keys are missing
            WriteFailed: If the output file cannot be written
        """
        document = copy.deepcopy(config.existing_values)
        self.apply_configuration(document, config)

        errors = self.validate_values(document, config)
        if errors:
            raise MergeFailed(f"merged values are incomplete: {'; '.join(errors)}")

        output_path = self.write_temp(document)
        config.existing_values = document
        config.output_values_path = str(output_path)
        return output_path
