import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from examServer.config import Settings
from examServer.main import create_app
from examServer.models.runner import RunResult
from examServer.services.code_runner import CodeRunner


class ScriptedRunner(CodeRunner):
    """Echo-style runner: prints stdin back unless a scripted outcome exists."""

    def __init__(self, outcomes=None):
        self.outcomes = outcomes or {}
        self.calls = []

    async def run(self, code, stdin=""):
        self.calls.append((code, stdin))
        if stdin in self.outcomes:
            return self.outcomes[stdin]
        return RunResult(success=True, output=stdin)


@pytest.fixture
def db():
    return AsyncMongoMockClient()["proctor_exam_test"]


@pytest.fixture
def runner():
    return ScriptedRunner()


@pytest.fixture
def settings():
    return Settings(mongodb_url="mongodb://unused", log_level="WARNING")


@pytest.fixture
def client(settings, db, runner):
    app = create_app(settings=settings, database=db, code_runner=runner)
    with TestClient(app) as test_client:
        yield test_client
