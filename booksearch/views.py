"""Text rendering of the landing and results pages.

These functions only read controller state and return lines of text; the
curses layer and the ``--print`` mode both draw from them.
"""

from typing import List

from .language_utils import get_language_name
from .lifecycle import ResultStatus
from .navigation import ROUTE_SEARCH

NO_RESULTS_SUGGESTIONS = [
    "Make sure all words are spelled correctly",
    "Try different keywords",
    "Try more general keywords",
    "Adjust your filters",
]


def _search_box(text, placeholder):
    return f"🔍 {text if text else placeholder}"


def _filter_lines(draft) -> List[str]:
    language = get_language_name(draft.language) if draft.language else "Select Language"
    arrow = "▲" if draft.language_menu_open else "▼"
    return [
        f"Author:   {draft.author or 'Enter author name'}",
        f"Language: {language} {arrow}",
        f"Year:     {draft.year if draft.year is not None else 'Any Year'}",
    ]


def applied_filter_tags(filters) -> List[str]:
    tags = []
    if filters.author:
        tags.append(f"Author: {filters.author}")
    if filters.language:
        tags.append(f"Language: {get_language_name(filters.language)}")
    if filters.year is not None:
        tags.append(f"Year: {filters.year}")
    return tags


def format_result(book) -> List[str]:
    details = " • ".join([
        f"Author: {book.author}",
        f"Language: {book.language}",
        f"Date: {book.year if book.year is not None else ''}".rstrip(),
    ])
    return [
        f"Project Gutenberg #{book.id}",
        f"  {book.title}",
        f"  {details}",
        f"  {book.url}",
    ]


def render_landing(controller) -> List[str]:
    draft = controller.home_draft
    lines = [
        "",
        _search_box(controller.text, "Search books"),
        "",
    ]
    lines.extend(_filter_lines(draft))
    if draft.has_values():
        lines.append("[Clear Filters]")
    lines.extend(["", "[Search]"])
    return lines


def render_no_results(controller) -> List[str]:
    payload = controller.lifecycle.payload
    lines = [
        f"No results found for \"{payload.query}\"",
        "Try different keywords or check your spelling",
        "",
        "Suggestions:",
    ]
    suggestions = list(NO_RESULTS_SUGGESTIONS)
    if controller.results_draft.has_values():
        suggestions.append("Try removing some filters")
    lines.extend(f"  • {item}" for item in suggestions)
    return lines


def render_results_list(controller) -> List[str]:
    payload = controller.lifecycle.payload
    lines = [f"About {payload.count} results for \"{payload.query}\""]

    tags = applied_filter_tags(controller.applied)
    if controller.filters_applied and tags:
        lines.append("Filters applied: " + "  ".join(f"[{tag}]" for tag in tags))
    lines.append("")

    for book in payload.items:
        lines.extend(format_result(book))
        lines.append("")
    return lines


def render_results(controller) -> List[str]:
    lines = [_search_box(controller.text, "Search"), ""]
    status = controller.status

    if controller.query is not None:
        lines.extend(_filter_lines(controller.results_draft))
        buttons = "[Apply Filters]"
        if controller.results_draft.has_values():
            buttons += "  [Clear Filters]"
        lines.extend([buttons, ""])

    if status is ResultStatus.LOADING:
        lines.append("Searching...")
    elif status is ResultStatus.EMPTY:
        lines.extend(render_no_results(controller))
    elif status is ResultStatus.POPULATED:
        lines.extend(render_results_list(controller))
    elif status is ResultStatus.FAILED:
        lines.append(f"❌ {controller.lifecycle.failure.message}")
        lines.append("Submit the search again to retry.")
    else:
        lines.append("Enter a search term to find books.")
    return lines


def render_page(controller) -> List[str]:
    if controller.route == ROUTE_SEARCH:
        return render_results(controller)
    return render_landing(controller)
