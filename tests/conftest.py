"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from commitgate.analysis import analyze_changes
from commitgate.constraints import ArtifactKind
from commitgate.global_config import ENV_OVERRIDES
from commitgate.llm.base import BackendResponse, ConstrainedBackend, FreeformBackend


class FakeConstrainedBackend(ConstrainedBackend):
    """Constrained backend returning a canned payload."""

    def __init__(self, payload, artifact_kind=ArtifactKind.SCHEMA):
        super().__init__(model="fake-model", artifact_kind=artifact_kind)
        self.payload = payload
        self.calls = []

    def generate_structured(self, system_prompt, user_prompt, artifact):
        self.calls.append((system_prompt, user_prompt, artifact))
        return BackendResponse(content=self.payload, model=self.model, input_tokens=10, output_tokens=20)


class FakeFreeformBackend(FreeformBackend):
    """Freeform backend returning canned text."""

    def __init__(self, text):
        super().__init__(model="fake-model")
        self.text = text
        self.calls = []

    def generate_text(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        return BackendResponse(content=self.text, model=self.model)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep COMMITGATE_* variables from the developer's shell out of tests."""
    for env_var in ENV_OVERRIDES:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.delenv("COMMITGATE_LOG_LEVEL", raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def small_analysis():
    """Analysis for two changed files (1-3 bullets)."""
    return analyze_changes(added=1, modified=1, deleted=0)


@pytest.fixture
def large_analysis():
    """Analysis for ten changed files (3-8 bullets)."""
    return analyze_changes(added=6, modified=4, deleted=0)


@pytest.fixture
def sample_payload():
    """Structured payload as a constrained backend returns it."""
    return {
        "emoji": "✨",
        "type": "feat",
        "scope": "auth",
        "subject": "add token refresh endpoint",
        "body": {
            "summary": "Keep sessions alive without forcing a new login.",
            "bulletPoints": [
                "Add refresh route to the auth router",
                "Store refresh tokens with an expiry",
            ],
        },
    }


@pytest.fixture
def valid_message():
    """A valid conventional commit message without emoji."""
    return (
        "feat(api): add token refresh\n"
        "\n"
        "Enables longer sessions.\n"
        "\n"
        "- add refresh endpoint\n"
        "- add retry logic"
    )


@pytest.fixture
def sample_status():
    """Porcelain status with staged, unstaged and untracked entries."""
    return "\n".join([
        "## main...origin/main",
        "A  src/new_module.py",
        "M  src/existing.py",
        " M src/unstaged_only.py",
        "?? notes.txt",
        "D  src/removed.py",
        "R  old_name.py -> new_name.py",
        "MM src/both.py",
    ])


@pytest.fixture
def sample_context_bundle():
    """Sample git context bundle for testing."""
    return """[BRANCH]
main

[FILE_CHANGES]
New files:
  + src/new_module.py
Modified files:
  ~ src/existing.py

[LAST_5_COMMITS]
- Fix bug in user authentication

[STAGED_DIFF]
diff --git a/src/new_module.py b/src/new_module.py
new file mode 100644
--- /dev/null
+++ b/src/new_module.py
@@ -0,0 +1,2 @@
+def hello():
+    return "hi"
"""


@pytest.fixture
def make_constrained_backend():
    """Factory for constrained backends with a canned payload."""
    return FakeConstrainedBackend


@pytest.fixture
def make_freeform_backend():
    """Factory for freeform backends with canned text."""
    return FakeFreeformBackend
