"""Terminal Output Formatting Package"""

import json
import os
import re
import sys
import threading


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    CYAN = '\033[36m'
    MAGENTA = '\033[35m'


def _supports_color(stream, handle: int) -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(stream, 'isatty') or not stream.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(handle), 7)
            return True
        except Exception:
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform == 'win32':
        try:
            '✓'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


# stdout and stderr are redirected independently
COLORS_ENABLED = _supports_color(sys.stdout, -11)
STDERR_COLORS_ENABLED = _supports_color(sys.stderr, -12)
UNICODE_ENABLED = _supports_unicode()

RULE = '─' if UNICODE_ENABLED else '-'


def _colorize(text: str, *codes: str, stderr: bool = False) -> str:
    if not (STDERR_COLORS_ENABLED if stderr else COLORS_ENABLED):
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def error(text: str) -> str:
    return _colorize(text, Colors.RED, stderr=True)


def warning(text: str) -> str:
    return _colorize(text, Colors.YELLOW, stderr=True)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def print_error(message: str) -> None:
    """Write a fatal error to stderr as a single line, message untouched."""
    print(error(message), file=sys.stderr)


def print_warning(message: str) -> None:
    print(warning(message), file=sys.stderr)


def print_debug(label: str, payload) -> None:
    """One stderr line per call: label plus the payload as compact JSON."""
    if not isinstance(payload, str):
        payload = json.dumps(payload, ensure_ascii=False)
    print(f"[DEBUG] {label}: {payload}", file=sys.stderr)


COMMIT_TYPE_COLORS = {
    'feat': Colors.GREEN,
    'fix': Colors.RED,
    'refactor': Colors.YELLOW,
    'docs': Colors.CYAN,
    'test': Colors.MAGENTA,
    'perf': Colors.GREEN,
    'chore': Colors.DIM,
    'style': Colors.DIM,
    'ci': Colors.CYAN,
    'build': Colors.CYAN,
}


def colorize_commit_type(message: str) -> str:
    """Color the commit type prefix on the first line of a commit message."""
    if not COLORS_ENABLED:
        return message
    lines = message.split('\n')
    match = re.match(r'^(\w+)(\([^)]*\))?(!?:)', lines[0])
    if match:
        color = COMMIT_TYPE_COLORS.get(match.group(1))
        if color:
            prefix = match.group(0)
            lines[0] = _colorize(prefix, Colors.BOLD, color) + lines[0][len(prefix):]
    return '\n'.join(lines)


def display_message(message: str) -> None:
    """Display commit message between horizontal rules with colored type."""
    lines = colorize_commit_type(message).split('\n')
    # Width from the raw message, ANSI codes excluded
    width = max((len(line) for line in message.split('\n')), default=40)
    print(f"\n{dim(RULE * width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim(RULE * width))


class Spinner:
    """Animated spinner on stderr for long operations. Use as context manager."""
    FRAMES_UNICODE = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
    FRAMES_ASCII = ['-', '\\', '|', '/']

    def __init__(self, label: str = ""):
        self.label = label
        self._thread = None
        self._stop_event = threading.Event()
        self._frames = self.FRAMES_UNICODE if UNICODE_ENABLED else self.FRAMES_ASCII
        self._active = hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()

    def _spin(self):
        idx = 0
        while not self._stop_event.is_set():
            frame = self._frames[idx % len(self._frames)]
            print(f'\r\033[K{frame} {self.label}', end='', file=sys.stderr, flush=True)
            idx += 1
            self._stop_event.wait(0.08)

    def __enter__(self):
        if self._active:
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *args):
        self._stop_event.set()
        if self._thread:
            self._thread.join()
        if self._active:
            print('\r\033[K', end='', file=sys.stderr, flush=True)


__all__ = [
    "Colors", "COLORS_ENABLED", "STDERR_COLORS_ENABLED", "UNICODE_ENABLED", "RULE",
    "error", "warning", "dim", "bold",
    "print_error", "print_warning", "print_debug",
    "colorize_commit_type", "display_message", "Spinner", "COMMIT_TYPE_COLORS",
]
