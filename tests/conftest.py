import pytest

from tablelink.schema import TableRegistry

NOW = object()


class RecordingHandle:
    """Builder handle that records every call; each call returns a new handle."""

    def __init__(self, calls):
        self.calls = calls

    def _then(self, *call):
        return RecordingHandle(self.calls + [call])

    def primary(self):
        return self._then("primary")

    def unsigned(self):
        return self._then("unsigned")

    def unique(self):
        return self._then("unique")

    def references(self, target):
        return self._then("references", target)

    def default_to(self, value):
        return self._then("default_to", value)

    def not_nullable(self):
        return self._then("not_nullable")

    def nullable(self):
        return self._then("nullable")


class RecordingFactory:
    def __init__(self):
        self.created = []

    def _column(self, op, name):
        self.created.append((op, name))
        return RecordingHandle([(op, name)])

    def increments(self, name):
        return self._column("increments", name)

    def string(self, name):
        return self._column("string", name)

    def integer(self, name):
        return self._column("integer", name)

    def float(self, name):
        return self._column("float", name)

    def boolean(self, name):
        return self._column("boolean", name)

    def json(self, name):
        return self._column("json", name)

    def jsonb(self, name):
        return self._column("jsonb", name)

    def timestamp(self, name):
        return self._column("timestamp", name)

    def date(self, name):
        return self._column("date", name)

    def uuid(self, name):
        return self._column("uuid", name)

    def now(self):
        return NOW


class RecordingBackend:
    def __init__(self, error=None):
        self.created = []
        self.error = error

    async def create_table(self, name, build):
        if self.error is not None:
            raise self.error
        self.created.append((name, build(RecordingFactory())))


@pytest.fixture
def registry():
    """Returns an empty registry with the 'app_' prefix."""
    return TableRegistry(prefix="app_")


@pytest.fixture
def factory():
    return RecordingFactory()


@pytest.fixture
def backend():
    return RecordingBackend()
