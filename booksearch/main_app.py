"""Main application logic and workflow orchestration."""

import curses
import queue
import threading

from .config import ui
from .controller import SearchController
from .language_utils import get_languages, year_options
from .lifecycle import ResultStatus
from .models import SearchFailure
from .navigation import ROUTE_SEARCH
from .views import render_page

HOME_HINTS = "/ search  a author  l language  y year  c clear  g go to  m menu  q quit"
RESULTS_HINTS = "/ search  a author  l lang  y year  f apply  c clear  b/n back/fwd  h home  m menu  q quit"


class ThreadedRunner:
    """Runs searches on worker threads and hands outcomes back to the UI thread."""

    def __init__(self, client):
        self.client = client
        self.outcomes = queue.Queue()

    def __call__(self, token, term, filters):
        worker = threading.Thread(target=self._run, args=(token, term, filters), daemon=True)
        worker.start()

    def _run(self, token, term, filters):
        try:
            outcome = self.client.execute(term, filters)
        except Exception as e:
            outcome = SearchFailure(f"Unexpected error: {e}")
        self.outcomes.put((token, outcome))

    def drain(self, controller):
        """Feed finished executions to the controller. Returns True if any was applied."""
        applied = False
        while True:
            try:
                token, outcome = self.outcomes.get_nowait()
            except queue.Empty:
                return applied
            if controller.complete(token, outcome):
                applied = True


class BookSearchApp:
    def __init__(self, controller, runner):
        self.controller = controller
        self.runner = runner
        self.alerts_shown = 0
        self.running = True

    def refresh(self):
        c = self.controller
        ui.title = c.title
        ui.hints = RESULTS_HINTS if c.route == ROUTE_SEARCH else HOME_HINTS
        ui.show_page(render_page(c), c.location)

    def report_outcome(self):
        c = self.controller
        if c.status is ResultStatus.POPULATED:
            ui.log(f"✅ {c.lifecycle.payload.count} results for \"{c.lifecycle.payload.query}\"")
        elif c.status is ResultStatus.EMPTY:
            ui.log(f"⚠️ No results for \"{c.lifecycle.payload.query}\"")
        elif c.status is ResultStatus.FAILED:
            ui.log(f"❌ {c.lifecycle.failure.message}")

    def idle(self):
        """Pick up finished searches. Returns True if the page was redrawn."""
        if not self.runner.drain(self.controller):
            return False
        self.refresh()
        self.report_outcome()
        return True

    def show_pending_alerts(self):
        alerts = self.controller.alerts
        while self.alerts_shown < len(alerts):
            ui.show_alert(alerts[self.alerts_shown])
            self.alerts_shown += 1

    # Actions

    def edit_search(self):
        c = self.controller
        text = ui.get_input("Search books", default=c.text)
        if text is None:
            return
        c.text = text
        self.submit()

    def submit(self):
        c = self.controller
        if c.submit():
            ui.log(f"🔍 Searching for \"{c.query.term}\"...")
        else:
            ui.log("⚠️ Enter a search term first")

    def edit_author(self):
        draft = self.controller.draft
        author = ui.get_input("Author", default=draft.author)
        if author is not None:
            draft.set_author(author.strip())

    def pick_language(self):
        draft = self.controller.draft
        draft.toggle_language_menu()
        self.refresh()

        languages = get_languages()
        options = ["Any Language"] + [f"{lang.name} ({lang.code.upper()})" for lang in languages]
        current = 0
        for i, lang in enumerate(languages, start=1):
            if lang.code == draft.language:
                current = i
                break

        choice = ui.show_menu("Select Language", options, current=current, on_idle=self.idle)
        if choice == -1:
            draft.toggle_language_menu()
        elif choice == 0:
            draft.set_language("")
        else:
            draft.set_language(languages[choice - 1].code)

    def pick_year(self):
        draft = self.controller.draft
        years = year_options()
        options = ["Any Year"] + [str(y) for y in years]
        current = years.index(draft.year) + 1 if draft.year in years else 0

        choice = ui.show_menu("Year", options, current=current, on_idle=self.idle)
        if choice == 0:
            draft.set_year("")
        elif choice > 0:
            draft.set_year(years[choice - 1])

    def apply_filters(self):
        c = self.controller
        if c.apply_filters():
            ui.log("🔎 Filters applied")

    def clear_filters(self):
        c = self.controller
        if c.clear_filters():
            ui.log("🧹 Filters cleared")

    def open_location(self):
        c = self.controller
        location = ui.get_input("Go to location", default=c.location)
        if location is not None:
            c.open(location)

    def show_action_menu(self):
        c = self.controller
        actions = [
            ("Search", self.edit_search),
            ("Set author", self.edit_author),
            ("Choose language", self.pick_language),
            ("Choose year", self.pick_year),
        ]
        if c.route == ROUTE_SEARCH:
            actions.append(("Apply filters", self.apply_filters))
        actions.append(("Clear filters", self.clear_filters))
        if c.history.can_go_back:
            actions.append(("Back", c.back))
        if c.history.can_go_forward:
            actions.append(("Forward", c.forward))
        if c.route == ROUTE_SEARCH:
            actions.append(("Home", c.go_home))
        actions.append(("Go to location", self.open_location))
        actions.append(("Exit", self.quit))

        choice = ui.show_menu("Menu", [label for label, _ in actions], on_idle=self.idle)
        if choice != -1:
            actions[choice][1]()

    def quit(self):
        self.running = False

    def handle_key(self, key):
        c = self.controller
        on_results = c.route == ROUTE_SEARCH
        bindings = {
            ord('/'): self.edit_search,
            ord('s'): self.edit_search,
            10: self.submit,
            13: self.submit,
            ord('a'): self.edit_author,
            ord('l'): self.pick_language,
            ord('y'): self.pick_year,
            ord('c'): self.clear_filters,
            ord('g'): self.open_location,
            ord('m'): self.show_action_menu,
            ord('q'): self.quit,
            ord('b'): c.back,
            curses.KEY_LEFT: c.back,
            ord('n'): c.forward,
            curses.KEY_RIGHT: c.forward,
        }
        if on_results:
            bindings[ord('f')] = self.apply_filters
            bindings[ord('h')] = c.go_home

        action = bindings.get(key)
        if action:
            action()
            return True
        return ui.handle_scroll_key(key)

    def run(self):
        stdscr = ui.stdscr
        stdscr.timeout(100)
        self.refresh()

        while self.running:
            self.show_pending_alerts()
            key = stdscr.getch()
            if key == -1:
                self.idle()
                continue
            if key == curses.KEY_RESIZE:
                self.refresh()
                continue
            if self.handle_key(key):
                self.refresh()


def main_app(stdscr, controller, runner):
    """Curses entry: drive the controller until the user quits."""
    ui.setup_screen(stdscr)
    ui.log("📚 Book Search started")

    app = BookSearchApp(controller, runner)
    controller.start()

    try:
        app.run()
    except KeyboardInterrupt:
        ui.log_to_file_only("🛑 Interrupted by user.")


def create_session(client, location):
    """Controller wired to a background runner, for the interactive client."""
    runner = ThreadedRunner(client)
    controller = SearchController(client, location=location, runner=runner)
    return controller, runner
