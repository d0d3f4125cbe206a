import threading

import pytest

from swiftsearch_core.engine import SearchConfig, SearchService
from swiftsearch_core.errors import IndexUnavailable
from swiftsearch_core.index.client import IndexClient
from swiftsearch_core.index.document import Document
from swiftsearch_core.index.memory import MemoryIndexClient


def make_catalog():
    return [
        Document(
            id=1, name="Standing Desk", description="Height adjustable frame",
            brand="Acme", category="Furniture", price=450.0, rating=4.5,
            color="Black", synonyms=["workstation"], stock=12,
        ),
        Document(
            id=2, name="Office Chair", description="Ergonomic chair for any desk",
            brand="Acme", category="Furniture", price=150.0, rating=3.8,
            color="Black", stock=40,
        ),
        Document(
            id=3, name="Desk Lamp", description="Warm LED light",
            brand="Lumo", category="Lighting", price=45.0, rating=4.1,
            color="White",
        ),
        Document(
            id=4, name="Bookshelf", description="Five shelves in solid oak",
            brand="Oakline", category="Furniture", price=1200.0,
            synonyms=["bookcase"], materials=["oak"],
        ),
        Document(
            id=5, name="Gaming Laptop", description="Powerful laptop",
            brand="Voltex", category="Electronics", price=2500.0, rating=4.7,
            color="Gray", color_variants=["Gray", "Black"],
        ),
        Document(
            id=6, name="Monitor Arm", description="Clamp mounts to any desk",
            brand="Voltex", category="Electronics", rating=2.0, color="Silver",
        ),
    ]


class RecordingIndex(IndexClient):
    """Wraps an index client, recording every page it is asked for."""

    def __init__(self, inner, fail_on=None, error=None):
        self.inner = inner
        self.max_window = inner.max_window
        self.fail_on = fail_on
        self.error = error or IndexUnavailable("index down")
        self.pages = []
        self._lock = threading.Lock()

    def execute(self, filter, page, cancel=None):
        with self._lock:
            self.pages.append(page)
        if self.fail_on is not None and page == self.fail_on:
            raise self.error
        return self.inner.execute(filter, page, cancel)


@pytest.fixture
def catalog():
    return make_catalog()


@pytest.fixture
def memory_index(catalog):
    return MemoryIndexClient(catalog)


@pytest.fixture(params=[True, False], ids=["parallel", "sequential"])
def config(request):
    return SearchConfig(parallel_queries=request.param)


@pytest.fixture
def service(memory_index, config):
    svc = SearchService(memory_index, config)
    yield svc
    svc.close()
