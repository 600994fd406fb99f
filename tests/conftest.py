"""Shared pytest fixtures for the country-flags test suite."""

import pytest

from country_flags.entities import FetchFailure, FetchResult
from country_flags.repositories import FileCacheStore, MemoryCacheStore

SAMPLE_CODES = {"us": "United States", "ua": "Ukraine"}


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now += minutes * 60


class FakeFetcher:
    """CountryCodeFetcher that replays canned results and counts calls."""

    def __init__(self, *results: FetchResult) -> None:
        self._results = list(results) or [FetchResult.success(dict(SAMPLE_CODES))]
        self.calls = 0
        self.closed = False

    def fetch(self) -> FetchResult:
        self.calls += 1
        if len(self._results) > 1:
            return self._results.pop(0)
        return self._results[0]

    def fetch_country_codes(self) -> dict[str, str]:
        return self.fetch().codes

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(timer=clock)


@pytest.fixture
def file_store(tmp_path, clock: FakeClock) -> FileCacheStore:
    return FileCacheStore(cache_dir=tmp_path / "cache", timer=clock)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def failing_fetcher() -> FakeFetcher:
    return FakeFetcher(FetchResult.failed(FetchFailure.TRANSPORT, "ConnectError: boom"))
