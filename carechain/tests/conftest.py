import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from carechain.app.domain import models  # noqa: F401


class FakeStub:
    """In-memory stand-in for the ledger runtime."""

    def __init__(self, state=None, attributes=None):
        self.state = dict(state or {})
        self.attributes = dict(attributes or {})
        self.puts = []
        self.attribute_reads = []

    def get_state(self, key):
        return self.state.get(key)

    def put_state(self, key, value):
        self.puts.append((key, value))
        self.state[key] = value

    def read_cert_attribute(self, name):
        self.attribute_reads.append(name)
        return self.attributes[name]

    def as_caller(self, **attributes):
        """Same world state, different credential."""
        other = FakeStub(attributes={k: v.encode() for k, v in attributes.items()})
        other.state = self.state
        return other


class RecordingAuditor:
    def __init__(self):
        self.entries = []

    def record(self, actor_id, role, action, resource, allowed):
        self.entries.append((actor_id, role, action, resource, allowed))


@pytest.fixture
def make_stub():
    def _make(state=None, **attributes):
        return FakeStub(state=state, attributes={k: v.encode() for k, v in attributes.items()})

    return _make


@pytest.fixture
def auditor():
    return RecordingAuditor()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine
