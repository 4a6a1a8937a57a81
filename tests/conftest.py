"""Pytest configuration and shared fixtures."""

from collections import deque
from pathlib import Path
from typing import Any, Optional

import pytest
import yaml

from chartwizard.configuration.wizard import ConfigurationWizard
from chartwizard.core.values_store import ValuesStore


class ScriptedGateway:
    """PromptGateway fake that replays scripted answers.

    Answers are consumed in order: ints for select_one, strings for
    ask_text/ask_masked. An exception instance in the script is raised
    instead of answering. Every prompt is recorded in ``prompts`` as
    (kind, label, extra) where extra is the options or the default.
    """

    def __init__(self, answers: Optional[list[Any]] = None):
        self.answers = deque(answers or [])
        self.prompts: list[tuple[str, str, Any]] = []
        self.messages: list[str] = []

    def _next(self, kind: str, label: str, extra: Any) -> Any:
        self.prompts.append((kind, label, extra))
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {kind} {label!r}")
        answer = self.answers.popleft()
        if isinstance(answer, Exception):
            raise answer
        return answer

    def select_one(self, label, options):
        answer = self._next("select", label, list(options))
        assert isinstance(answer, int), f"select {label!r} scripted with {answer!r}"
        assert 0 <= answer < len(options)
        return answer

    def ask_text(self, label, default=None):
        return self._next("text", label, default)

    def ask_masked(self, label):
        return self._next("masked", label, None)

    def info(self, message):
        self.messages.append(message)

    def labels(self, kind: Optional[str] = None) -> list[str]:
        return [label for k, label, _ in self.prompts if kind is None or k == kind]


@pytest.fixture
def gateway_factory():
    """Factory fixture for ScriptedGateway instances."""

    def _create(*answers):
        return ScriptedGateway(list(answers))

    return _create


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Empty working directory the wizard reads from and writes into."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_values(workdir):
    """Write a helm-values.yaml into the working directory and return its path."""

    def _write(data: dict[str, Any]) -> Path:
        path = workdir / "helm-values.yaml"
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def store(workdir):
    """ValuesStore reading and writing in the working directory."""
    return ValuesStore(base_path=workdir / "helm-values.yaml", output_dir=workdir)


@pytest.fixture
def make_wizard(store):
    """Build a ConfigurationWizard around a scripted gateway."""

    def _create(gateway):
        return ConfigurationWizard(gateway, store=store)

    return _create


@pytest.fixture
def read_output():
    """Load the values file a session wrote."""

    def _read(config) -> dict[str, Any]:
        return yaml.safe_load(Path(config.output_values_path).read_text(encoding="utf-8"))

    return _read
