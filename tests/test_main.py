"""Tests for the command line entry point."""

import pytest

from booksearch.__main__ import parse_args, print_location
from booksearch.controller import SearchController
from booksearch.main_app import ThreadedRunner
from booksearch.models import SearchFailure

from search_fakes import FakeClient


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.location == "/"
        assert args.print_only is False

    def test_location_and_flags(self):
        args = parse_args(["--print", "--base-url", "http://search:7000", "--timeout", "3",
                           "/search?q=poe&language=french&year=1920"])
        assert args.print_only is True
        assert args.base_url == "http://search:7000"
        assert args.timeout == 3.0
        assert args.location == "/search?q=poe&language=french&year=1920"


class TestPrintLocation:
    def test_prints_results_page(self, client, capsys):
        assert print_location(client, "/search?q=dogs") == 0
        out = capsys.readouterr().out
        assert 'About 2 results for "dogs"' in out
        assert "dogs - Book Search" in out
        assert len(client.calls) == 1

    def test_failure_exit_code(self, capsys):
        client = FakeClient(default=SearchFailure("timed out"))
        assert print_location(client, "/search?q=dogs") == 1
        assert "Error during search: timed out" in capsys.readouterr().out

    @pytest.mark.parametrize("location", ["", "/"])
    def test_landing_page_makes_no_request(self, client, capsys, location):
        assert print_location(client, location) == 0
        assert client.calls == []
        assert "Search books" in capsys.readouterr().out


class TestThreadedRunner:
    def test_outcomes_applied_on_drain(self, client):
        runner = ThreadedRunner(client)
        ctrl = SearchController(client, location="/search?q=dogs", runner=lambda *args: None)
        ctrl.start()
        token = ctrl.lifecycle.latest_token

        runner._run(token, "dogs", ctrl.applied)
        assert runner.drain(ctrl) is True
        assert ctrl.lifecycle.payload.count == 2
        assert runner.drain(ctrl) is False

    def test_unexpected_client_error_becomes_failure(self):
        class ExplodingClient:
            def execute(self, term, filters):
                raise RuntimeError("kaboom")

        runner = ThreadedRunner(ExplodingClient())
        runner._run(1, "dogs", None)
        token, outcome = runner.outcomes.get_nowait()
        assert token == 1
        assert outcome == SearchFailure("Unexpected error: kaboom")
