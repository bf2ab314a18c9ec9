"""Tests for page rendering."""

from booksearch.controller import SearchController
from booksearch.models import FilterSet, SearchFailure
from booksearch.views import applied_filter_tags, render_page

from search_fakes import DeferredRunner, FakeClient


def page_text(controller):
    return "\n".join(render_page(controller))


class TestLanding:
    def test_placeholders(self, controller):
        text = page_text(controller)
        assert "🔍 Search books" in text
        assert "Select Language" in text
        assert "Any Year" in text
        assert "[Clear Filters]" not in text

    def test_clear_button_only_with_draft_values(self, controller):
        controller.draft.set_language("fr")
        text = page_text(controller)
        assert "Language: French" in text
        assert "[Clear Filters]" in text


class TestResults:
    def test_populated(self, controller):
        controller.text = "dogs"
        controller.submit()
        lines = render_page(controller)

        assert 'About 2 results for "dogs"' in lines
        assert lines.count("Project Gutenberg #1001") == 1
        assert "Project Gutenberg #1002" in lines
        assert "  The Call of the Wild" in lines
        assert "  Author: Jack London • Language: en • Date: 1903" in lines
        assert "  https://www.gutenberg.org/ebooks/1001" in lines

    def test_no_results_panel(self, controller):
        controller.text = "zzzzqqqq"
        controller.submit()
        text = page_text(controller)

        assert 'No results found for "zzzzqqqq"' in text
        assert "Try different keywords or check your spelling" in text
        assert "Try removing some filters" not in text
        assert "About" not in text

    def test_no_results_suggests_removing_filters(self, controller):
        controller.text = "zzzzqqqq"
        controller.submit()
        controller.results_draft.set_author("Nobody")
        assert "Try removing some filters" in page_text(controller)

    def test_loading(self):
        ctrl = SearchController(FakeClient(), location="/search?q=dogs", runner=DeferredRunner())
        ctrl.start()
        text = page_text(ctrl)
        assert "Searching..." in text
        assert "About" not in text

    def test_failure(self):
        ctrl = SearchController(FakeClient(default=SearchFailure("Could not reach the search service")),
                                location="/search?q=dogs")
        ctrl.start()
        text = page_text(ctrl)
        assert "❌ Could not reach the search service" in text
        assert "Submit the search again to retry." in text

    def test_filters_applied_tags_only_after_apply(self, client):
        ctrl = SearchController(client, location="/search?q=dogs&author=Twain")
        ctrl.start()
        assert "Filters applied" not in page_text(ctrl)

        ctrl.results_draft.set_language("fr")
        ctrl.apply_filters()
        text = page_text(ctrl)
        assert "Filters applied: [Author: Twain]  [Language: French]" in text

    def test_draft_edits_not_shown_as_applied(self, controller):
        controller.text = "dogs"
        controller.submit()
        controller.results_draft.set_author("Twain")
        controller.apply_filters()
        controller.results_draft.set_author("Poe")

        text = page_text(controller)
        assert "[Author: Twain]" in text
        assert "Author:   Poe" in text

    def test_no_query(self, client):
        ctrl = SearchController(client, location="/search")
        ctrl.start()
        assert "Enter a search term to find books." in page_text(ctrl)
        assert "[Apply Filters]" not in page_text(ctrl)


class TestAppliedFilterTags:
    def test_unknown_language_code_shown_raw(self):
        assert applied_filter_tags(FilterSet(language="french", year=1920)) == [
            "Language: french",
            "Year: 1920",
        ]
