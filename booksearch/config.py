"""Configuration and UI classes."""

import os
import time
import curses
import logging
import tempfile
import unicodedata
from datetime import datetime


# Configuration constants
SEARCH_BASE_URL = os.environ.get("BOOKSEARCH_BASE_URL", "http://localhost:7000")
REQUEST_TIMEOUT = float(os.environ.get("BOOKSEARCH_TIMEOUT", "10"))
LOG_FILE = os.path.join(tempfile.gettempdir(), "booksearch.log")
RESULT_LINK_BASE = "https://www.gutenberg.org/ebooks/"
APP_TITLE = "Book Search"
YEAR_SPAN = 150  # Years offered by the year picker, counting back from this year

logger = logging.getLogger("booksearch")


def display_width(text):
    """Calculate the display width of text, accounting for Unicode characters"""
    width = 0
    for char in text:
        category = unicodedata.category(char)
        if category in ('Mn', 'Mc', 'Me'):  # Combining marks don't add width
            continue
        if 0xFE00 <= ord(char) <= 0xFE0F:  # Variation selectors
            continue

        eaw = unicodedata.east_asian_width(char)
        if eaw in ('F', 'W'):
            width += 2
        elif category[0] == 'C':
            width += 0
        else:
            width += 1
    return width


def truncate_to_width(text, max_width):
    """Cut text so its display width fits, adding an ellipsis when it was cut"""
    if display_width(text) <= max_width:
        return text
    if max_width <= 3:
        limit, suffix = max_width, ""
    else:
        limit, suffix = max_width - 3, "..."
    truncated = ""
    for char in text:
        if display_width(truncated + char) > limit:
            break
        truncated += char
    return truncated + suffix


class NCursesUI:
    """Curses screen: header, address bar, scrollable page body and status line."""

    PAGE_TOP = 3

    def __init__(self):
        self.stdscr = None
        self.height = 0
        self.width = 0
        self.page_lines = []
        self.location = ""
        self.title = APP_TITLE
        self.hints = ""
        self.status = "Ready"
        self.scroll_offset = 0            # First page line shown (0 = top)
        self.last_refresh_time = 0
        self.refresh_interval = 0.1        # Minimum time between idle refreshes

    def init_colors(self):
        curses.start_color()
        curses.init_pair(1, curses.COLOR_WHITE, curses.COLOR_BLUE)    # Header
        curses.init_pair(2, curses.COLOR_GREEN, curses.COLOR_BLACK)   # Success
        curses.init_pair(3, curses.COLOR_RED, curses.COLOR_BLACK)     # Error
        curses.init_pair(4, curses.COLOR_YELLOW, curses.COLOR_BLACK)  # Warning / filters
        curses.init_pair(5, curses.COLOR_CYAN, curses.COLOR_BLACK)    # Info / links
        curses.init_pair(6, curses.COLOR_BLACK, curses.COLOR_WHITE)   # Input field

    def setup_screen(self, stdscr):
        self.stdscr = stdscr
        self.height, self.width = stdscr.getmaxyx()
        curses.curs_set(0)
        stdscr.keypad(True)
        stdscr.leaveok(True)
        self.init_colors()
        stdscr.clear()

    @property
    def page_height(self):
        return max(1, self.height - self.PAGE_TOP - 2)

    def draw_header(self):
        title = truncate_to_width(f"📚 {self.title}", self.width - 2)
        self.stdscr.attron(curses.color_pair(1) | curses.A_BOLD)
        self.stdscr.addstr(0, 0, " " * (self.width - 1))
        self.stdscr.addstr(0, max(0, (self.width - display_width(title)) // 2), title)
        self.stdscr.attroff(curses.color_pair(1) | curses.A_BOLD)

    def draw_address_bar(self):
        bar = truncate_to_width(f"🔗 {self.location or '/'}", self.width - 2)
        self.stdscr.addstr(1, 0, " " * (self.width - 1))
        self.stdscr.attron(curses.color_pair(6))
        self.stdscr.addstr(1, 1, bar)
        self.stdscr.attroff(curses.color_pair(6))

    def _line_color(self, line):
        stripped = line.strip()
        if stripped.startswith("❌") or stripped.startswith("⚠️"):
            return curses.color_pair(3)
        if stripped.startswith("About ") or stripped.startswith("✅"):
            return curses.color_pair(2)
        if stripped.startswith("Filters applied") or stripped.startswith("["):
            return curses.color_pair(4)
        if stripped.startswith("http") or stripped.startswith("🔍"):
            return curses.color_pair(5)
        return curses.color_pair(0)

    def draw_page(self):
        height = self.page_height
        total_lines = len(self.page_lines)
        max_scroll = max(0, total_lines - height)
        self.scroll_offset = max(0, min(self.scroll_offset, max_scroll))

        visible = self.page_lines[self.scroll_offset:self.scroll_offset + height]
        for i in range(height):
            row = self.PAGE_TOP + i
            try:
                self.stdscr.addstr(row, 0, " " * (self.width - 1))
                if i < len(visible):
                    line = truncate_to_width(visible[i], self.width - 3)
                    color = self._line_color(line)
                    self.stdscr.attron(color)
                    self.stdscr.addstr(row, 1, line)
                    self.stdscr.attroff(color)
            except curses.error:
                pass

        if total_lines > height:
            self.draw_scrollbar(height, total_lines)

    def draw_scrollbar(self, height, total_lines):
        """Draw a visual scrollbar on the right side of the page"""
        scrollbar_col = self.width - 2
        if height < 3:
            return
        thumb_size = max(1, int(height * height / total_lines))
        max_scroll = total_lines - height
        thumb_pos = int((height - thumb_size) * (self.scroll_offset / max_scroll))

        for i in range(height):
            try:
                if thumb_pos <= i < thumb_pos + thumb_size:
                    self.stdscr.attron(curses.color_pair(6))
                    self.stdscr.addstr(self.PAGE_TOP + i, scrollbar_col, "█")
                    self.stdscr.attroff(curses.color_pair(6))
                else:
                    self.stdscr.addstr(self.PAGE_TOP + i, scrollbar_col, "░")
            except curses.error:
                pass

    def draw_status(self):
        status_line = truncate_to_width(f"Status: {self.status}", self.width - 1)
        hints_line = truncate_to_width(self.hints, self.width - 1)
        try:
            self.stdscr.addstr(self.height - 2, 0, " " * (self.width - 1))
            self.stdscr.attron(curses.color_pair(5))
            self.stdscr.addstr(self.height - 2, 0, hints_line)
            self.stdscr.attroff(curses.color_pair(5))
            self.stdscr.addstr(self.height - 1, 0, " " * (self.width - 1))
            self.stdscr.addstr(self.height - 1, 0, status_line)
        except curses.error:
            pass

    def log(self, message):
        """Show a message on the status line and mirror it to the log file"""
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.status = f"[{timestamp}] {message}"
        self.log_to_file_only(message)
        self.refresh_display()

    def log_to_file_only(self, message):
        """Log message only to file, not to ncurses display"""
        logger.info(message)

    def set_status(self, status):
        self.status = status
        self.refresh_display()

    def show_page(self, lines, location=None):
        """Replace the page body; scroll resets when the location changes"""
        if location is not None and location != self.location:
            self.location = location
            self.scroll_offset = 0
        self.page_lines = list(lines)
        self.refresh_display()

    def refresh_display(self):
        if self.stdscr:
            new_height, new_width = self.stdscr.getmaxyx()
            if (new_height, new_width) != (self.height, self.width):
                self.height, self.width = new_height, new_width
                self.stdscr.clear()

            self.draw_header()
            self.draw_address_bar()
            self.draw_page()
            self.draw_status()
            self.stdscr.refresh()
            self.last_refresh_time = time.time()

    def handle_scroll_key(self, key):
        """Scroll the page body. Returns True if the key was a scroll key."""
        if key in (curses.KEY_DOWN, ord('j')):
            self.scroll_offset += 1
        elif key in (curses.KEY_UP, ord('k')):
            self.scroll_offset = max(0, self.scroll_offset - 1)
        elif key == curses.KEY_NPAGE:
            self.scroll_offset += self.page_height
        elif key == curses.KEY_PPAGE:
            self.scroll_offset = max(0, self.scroll_offset - self.page_height)
        else:
            return False
        self.refresh_display()
        return True

    def get_input(self, prompt, default=""):
        """Single-line text input. Returns None when cancelled with Escape."""
        input_height = 7
        input_width = min(60, self.width - 4)
        start_y = (self.height - input_height) // 2
        start_x = (self.width - input_width) // 2

        input_win = curses.newwin(input_height, input_width, start_y, start_x)
        input_win.keypad(True)
        input_win.nodelay(False)
        input_win.box()
        input_win.attron(curses.color_pair(1) | curses.A_BOLD)
        input_win.addstr(1, 2, truncate_to_width(prompt, input_width - 4))
        input_win.attroff(curses.color_pair(1) | curses.A_BOLD)

        field_y = 3
        field_width = input_width - 4
        input_win.addstr(input_height - 2, 2, "Enter: confirm, Esc: cancel, Ctrl+U: clear")
        curses.curs_set(1)
        input_str = default or ""
        cursor_pos = len(input_str)

        def refresh_input():
            # Keep the cursor visible by scrolling the field horizontally
            offset = max(0, cursor_pos - field_width + 1)
            input_win.attron(curses.color_pair(6))
            input_win.addstr(field_y, 2, " " * field_width)
            input_win.addstr(field_y, 2, input_str[offset:offset + field_width])
            input_win.attroff(curses.color_pair(6))
            input_win.move(field_y, 2 + cursor_pos - offset)
            input_win.refresh()

        refresh_input()
        cancelled = False

        while True:
            try:
                key = input_win.get_wch()
            except KeyboardInterrupt:
                cancelled = True
                break
            except curses.error:
                continue

            if key in ("\n", "\r", curses.KEY_ENTER):
                break
            elif key == "\x1b":  # Escape
                cancelled = True
                break
            elif key in (curses.KEY_BACKSPACE, "\x7f", "\x08"):
                if cursor_pos > 0:
                    input_str = input_str[:cursor_pos - 1] + input_str[cursor_pos:]
                    cursor_pos -= 1
            elif key == curses.KEY_LEFT:
                cursor_pos = max(0, cursor_pos - 1)
            elif key == curses.KEY_RIGHT:
                cursor_pos = min(len(input_str), cursor_pos + 1)
            elif key in (curses.KEY_HOME, "\x01"):  # Ctrl+A
                cursor_pos = 0
            elif key in (curses.KEY_END, "\x05"):  # Ctrl+E
                cursor_pos = len(input_str)
            elif key == "\x15":  # Ctrl+U (clear line)
                input_str = ""
                cursor_pos = 0
            elif isinstance(key, str) and key.isprintable():
                input_str = input_str[:cursor_pos] + key + input_str[cursor_pos:]
                cursor_pos += 1
            refresh_input()

        curses.curs_set(0)
        del input_win
        self.refresh_display()
        return None if cancelled else input_str

    def show_menu(self, title, options, current=0, on_idle=None):
        """Modal option list. Returns the chosen index, or -1 on Escape.

        on_idle is called roughly every 100ms while the menu waits for a key,
        so background work can update the page behind the menu.
        """
        max_visible_options = max(1, min(len(options), self.height - 8))
        menu_height = max_visible_options + 6
        menu_width = min(self.width - 2, max(display_width(title), max(display_width(opt) for opt in options)) + 8)
        start_y = max(0, (self.height - menu_height) // 2)
        start_x = max(0, (self.width - menu_width) // 2)

        menu_win = curses.newwin(menu_height, menu_width, start_y, start_x)
        menu_win.keypad(True)
        menu_win.timeout(100)

        current = max(0, min(current, len(options) - 1))
        scroll_offset = max(0, current - max_visible_options + 1)

        def draw_menu():
            menu_win.clear()
            menu_win.box()

            menu_win.attron(curses.color_pair(1) | curses.A_BOLD)
            menu_win.addstr(1, max(1, (menu_width - display_width(title)) // 2), truncate_to_width(title, menu_width - 2))
            menu_win.attroff(curses.color_pair(1) | curses.A_BOLD)

            for i in range(max_visible_options):
                option_index = scroll_offset + i
                if option_index >= len(options):
                    break
                label = truncate_to_width(options[option_index], menu_width - 6)
                if option_index == current:
                    menu_win.attron(curses.color_pair(6))
                    menu_win.addstr(3 + i, 2, f"> {label}")
                    menu_win.attroff(curses.color_pair(6))
                else:
                    menu_win.addstr(3 + i, 2, f"  {label}")

            instructions = "↑↓: Navigate, Enter: Select, Esc: Close"
            if len(options) > max_visible_options:
                instructions += f" ({current + 1}/{len(options)})"
                if scroll_offset > 0:
                    menu_win.addstr(2, menu_width - 3, "↑")
                if scroll_offset + max_visible_options < len(options):
                    menu_win.addstr(menu_height - 3, menu_width - 3, "↓")

            menu_win.addstr(menu_height - 2, 2, truncate_to_width(instructions, menu_width - 4))
            menu_win.refresh()

        draw_menu()

        while True:
            key = menu_win.getch()

            if key == -1:
                if on_idle and time.time() - self.last_refresh_time >= self.refresh_interval:
                    if on_idle():
                        menu_win.touchwin()
                        draw_menu()
                continue

            if key == curses.KEY_UP:
                current = (current - 1) % len(options)
            elif key == curses.KEY_DOWN:
                current = (current + 1) % len(options)
            elif key == curses.KEY_PPAGE:
                current = max(0, current - max_visible_options)
            elif key == curses.KEY_NPAGE:
                current = min(len(options) - 1, current + max_visible_options)
            elif key in (10, 13, curses.KEY_ENTER):
                del menu_win
                self.refresh_display()
                return current
            elif key == 27:  # Escape
                del menu_win
                self.refresh_display()
                return -1
            else:
                continue

            if current < scroll_offset:
                scroll_offset = current
            elif current >= scroll_offset + max_visible_options:
                scroll_offset = current - max_visible_options + 1
            draw_menu()

    def show_alert(self, message, title="Error"):
        """Blocking notification box, dismissed with any key"""
        words = message.split()
        box_width = min(self.width - 4, max(30, min(70, display_width(message) + 4)))
        lines, current_line = [], ""
        for word in words:
            candidate = f"{current_line} {word}".strip()
            if display_width(candidate) <= box_width - 4:
                current_line = candidate
            else:
                if current_line:
                    lines.append(current_line)
                current_line = word
        if current_line:
            lines.append(current_line)
        lines = lines[:max(1, self.height - 8)]

        box_height = len(lines) + 5
        alert_win = curses.newwin(box_height, box_width,
                                  max(0, (self.height - box_height) // 2),
                                  max(0, (self.width - box_width) // 2))
        alert_win.box()
        alert_win.attron(curses.color_pair(3) | curses.A_BOLD)
        alert_win.addstr(1, 2, truncate_to_width(f"❌ {title}", box_width - 4))
        alert_win.attroff(curses.color_pair(3) | curses.A_BOLD)
        for i, line in enumerate(lines):
            alert_win.addstr(2 + i, 2, truncate_to_width(line, box_width - 4))
        alert_win.addstr(box_height - 2, 2, "Press any key to continue")
        alert_win.refresh()
        alert_win.getch()
        del alert_win
        self.refresh_display()


# Global UI instance
ui = NCursesUI()
