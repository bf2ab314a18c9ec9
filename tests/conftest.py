"""Shared fixtures for booksearch tests."""

import pytest

from booksearch.controller import SearchController
from booksearch.models import SearchFailure

from search_fakes import DOGS_BOOKS, DeferredRunner, FakeClient, make_payload


@pytest.fixture
def dogs_payload():
    return make_payload("dogs", books=DOGS_BOOKS)


@pytest.fixture
def client(dogs_payload):
    return FakeClient(outcomes={
        "dogs": dogs_payload,
        "zzzzqqqq": make_payload("zzzzqqqq", count=0),
        "broken": SearchFailure("Could not reach the search service at http://localhost:7000"),
    })


@pytest.fixture
def controller(client):
    ctrl = SearchController(client, location="/")
    ctrl.start()
    return ctrl


@pytest.fixture
def deferred():
    return DeferredRunner()
