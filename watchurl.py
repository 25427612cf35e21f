#!/usr/bin/env python3


import os
import re
import sys
import math
import time
import uuid
import random
import signal
import socket
import hashlib
import logging
import argparse
import threading
import subprocess
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import html2text
import requests
from bs4 import BeautifulSoup, Comment
from diff_match_patch import diff_match_patch
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from urllib3.exceptions import LocationParseError

log = logging.getLogger("watchurl")

# stdout carries diffs only; logs and tables go to stderr
_err_console = Console(stderr=True)

DEFAULT_STATE_DIR = "~/.watchurl/"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win32; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36"
MAX_KEY_LEN = 127  # conservative filename limit
INITIAL_FETCH = "(initial fetch)"

# ========================
# Terminal color theme
# ========================

RED   = "\033[91m"
GREEN = "\033[92m"
RESET = "\033[0m"


@dataclass(frozen=True)
class Markers:
    added_start: str
    added_end: str
    removed_start: str
    removed_end: str


ANSI_MARKERS = Markers(GREEN, RESET, RED, RESET)
# wdiff-style tags for logs and non-color terminals
PLAIN_MARKERS = Markers("{+", "+}", "[-", "-]")

# ========================
# Errors
# ========================

class WatchError(Exception):
    """Base class for per-target failures. A watcher logs these and moves on."""


class ConfigurationError(WatchError):
    pass


class StateIOError(WatchError):
    pass


class Cancelled(WatchError):
    pass


class FetchError(WatchError):
    def __init__(self, message: str, kind: str = "other"):
        super().__init__(message)
        self.kind = kind


class FetchTimeout(FetchError):
    def __init__(self, message: str):
        super().__init__(message, kind="timeout")

# ========================
# Data structures
# ========================

@dataclass(frozen=True)
class WatchConfig:
    state_dir: str = DEFAULT_STATE_DIR
    repeat_every: float = 0.0       # seconds; <= 0 means check once
    jitter: float = 120.0           # seconds
    request_timeout: float = 30.0   # seconds; <= 0 disables
    log_full_diff: bool = False
    macos_notify: bool = False
    macos_clipboard: bool = False
    discord_webhook: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    color: bool = True

    @property
    def markers(self) -> Markers:
        # the full diff goes to the log, where escape codes are noise
        if self.color and not self.log_full_diff:
            return ANSI_MARKERS
        return PLAIN_MARKERS


@dataclass(frozen=True)
class Report:
    url: str
    text: str
    edits: int

    @property
    def initial(self) -> bool:
        return self.text == INITIAL_FETCH and self.edits == 0

# ========================
# Persistence
# ========================

_SPECIAL_RE = re.compile(r"[^\w]+", re.ASCII)


def derive_key(url: str, max_len: int = MAX_KEY_LEN) -> str:
    """Filesystem-safe name for a URL: sha1 hex digest plus a sanitized copy of the URL.

    Long URLs are truncated, so two URLs that only differ past the limit
    still differ in the digest prefix.
    """
    digest = hashlib.sha1(url.encode("utf-8")).hexdigest()
    name = f"{digest}_{_SPECIAL_RE.sub('_', url)}"
    return name[:max_len]


class StateStore:
    """One snapshot file per URL under state_dir."""

    def __init__(self, state_dir: str = DEFAULT_STATE_DIR):
        self.state_dir = state_dir

    def base_dir(self) -> str:
        d = self.state_dir
        if d.startswith("~"):
            expanded = os.path.expanduser(d)
            if expanded.startswith("~"):
                raise ConfigurationError(f"cannot resolve home directory for state dir {d!r}")
            d = expanded
        return d

    def path_for(self, url: str) -> str:
        return os.path.join(self.base_dir(), derive_key(url))

    def read(self, url: str) -> Optional[str]:
        """Return the last snapshot for url, or None if there is none yet."""
        path = self.path_for(url)
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                text = f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StateIOError(f"reading snapshot {path}: {e}") from e
        log.debug("Address %s snapshot loaded from %s (%d bytes)", url, path, len(text))
        return text

    # temp file + fsync + replace so our own later reads never see a partial file
    def write(self, url: str, text: str) -> None:
        path = self.path_for(url)
        log.debug("Address %s stored in %s (%d bytes)", url, path, len(text))
        tmp = f"{path}.{uuid.uuid4().hex}.tmp"
        try:
            os.makedirs(os.path.dirname(path), mode=0o755, exist_ok=True)
            with open(tmp, "w", encoding="utf-8", newline="") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            try:
                if os.path.exists(tmp):
                    os.remove(tmp)
            except OSError:
                pass
            raise StateIOError(f"writing snapshot {path}: {e}") from e

# ========================
# Diff rendering
# ========================

def _render_equal(text: str) -> str:
    first = text.find("\n")
    last = text.rfind("\n")
    if first == last:
        return text
    skipped = len(text[first:last].encode("utf-8"))
    return f"{text[:first]}\n(skipped {skipped} bytes)\n{text[last:]}"


def render_diff(old: str, new: str, markers: Markers = ANSI_MARKERS) -> Tuple[str, int]:
    """Render a compact, annotated diff of old -> new.

    Returns the report text and the number of inserted or deleted spans.
    Unchanged spans spanning several lines are cut down to their first and
    last line with a "(skipped N bytes)" note in between.
    """
    dmp = diff_match_patch()
    diffs = dmp.diff_main(old, new)
    dmp.diff_cleanupSemantic(diffs)

    out: List[str] = []
    edits = 0
    for op, text in diffs:
        if op == dmp.DIFF_INSERT:
            edits += 1
            out.append(markers.added_start + text + markers.added_end)
        elif op == dmp.DIFF_DELETE:
            edits += 1
            out.append(markers.removed_start + text + markers.removed_end)
        else:
            out.append(_render_equal(text))
    return "".join(out), edits

# ========================
# HTTP fetching & content extraction
# ========================

_CHUNK_SIZE = 64 * 1024
_HIDDEN_TAGS = ["script", "style", "noscript", "template"]


def _root_exc(e: BaseException) -> BaseException:
    cur = e
    seen = set()
    while True:
        nxt = getattr(cur, "__cause__", None) or getattr(cur, "__context__", None)
        if not nxt or nxt in seen:
            return cur
        seen.add(nxt)
        cur = nxt


# coarse, stable kind for a transport failure
def classify_net_error(e: BaseException) -> str:
    names = [type(e).__name__.lower(), type(_root_exc(e)).__name__.lower()]
    for arg in getattr(e, "args", ()):
        if isinstance(arg, BaseException):
            names.append(type(arg).__name__.lower())
            names.append(type(_root_exc(arg)).__name__.lower())
            reason = getattr(arg, "reason", None)
            if isinstance(reason, BaseException):
                names.append(type(reason).__name__.lower())
                names.append(type(_root_exc(reason)).__name__.lower())

    def has(*needles: str) -> bool:
        return any(n in name for name in names for n in needles)

    # DNS / name resolution
    if has("gaierror", "nameresolution"):
        return "dns"
    if has("timeout"):
        return "timeout"
    if has("ssl", "tls"):
        return "tls"
    if has("proxy"):
        return "proxy"
    # refused / reset / generic connection problems
    if has("connection", "refused"):
        return "connect"
    return "other"


def html_to_text(body: bytes) -> str:
    """Visible text of an HTML document. Link targets and images are dropped."""
    try:
        soup = BeautifulSoup(body, "html.parser")
        for tag in soup(_HIDDEN_TAGS):
            tag.decompose()
        for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
            comment.extract()
        converter = html2text.HTML2Text()
        converter.ignore_links = True
        converter.ignore_images = True
        converter.body_width = 0
        return converter.handle(str(soup))
    except Exception as e:
        raise FetchError(f"extracting text: {e}", kind="extract") from e


def fetch_text(url: str, cancel: threading.Event, timeout: float = 30.0,
               user_agent: str = DEFAULT_USER_AGENT) -> str:
    """GET url and return its visible text.

    timeout bounds the whole request including the body; <= 0 disables it.
    Any HTTP status is accepted, only transport failures raise.
    """
    if cancel.is_set():
        raise Cancelled(f"fetching {url}: cancelled")
    deadline = time.monotonic() + timeout if timeout > 0 else None
    headers = {"User-Agent": user_agent}
    chunks: List[bytes] = []
    guard = None
    try:
        with requests.get(url, headers=headers, timeout=timeout if timeout > 0 else None, stream=True) as resp:
            log.debug("GET %s -> %s", url, resp.status_code)
            guard = _Watchdog(resp, cancel, deadline)
            guard.start()
            for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                if cancel.is_set():
                    raise Cancelled(f"fetching {url}: cancelled")
                if deadline is not None and time.monotonic() > deadline:
                    raise FetchTimeout(f"fetching {url}: timed out after {timeout:g}s")
                chunks.append(chunk)
            guard.stop()
            # an aborted body can end early without an error
            if guard.reason is not None:
                raise _interrupted(url, timeout, guard.reason)
    except Exception as e:
        err = _fetch_error(url, timeout, e, guard.reason if guard else None)
        if err is None or err is e:
            raise
        raise err from e
    finally:
        if guard is not None:
            guard.stop()
    return html_to_text(b"".join(chunks))


_WATCHDOG_POLL = 0.05


class _Watchdog(threading.Thread):
    """Aborts a streaming response once the deadline passes or cancel is set.

    requests restarts its read timeout on every recv, so a server that
    drips the body would otherwise hold the fetch open indefinitely.
    """

    def __init__(self, resp: requests.Response, cancel: threading.Event,
                 deadline: Optional[float]):
        super().__init__(name="fetch watchdog", daemon=True)
        self.resp = resp
        self.cancel = cancel
        self.deadline = deadline
        self.done = threading.Event()
        self.reason: Optional[str] = None

    def run(self) -> None:
        while not self.done.wait(_WATCHDOG_POLL):
            if self.cancel.is_set():
                self.reason = "cancelled"
            elif self.deadline is not None and time.monotonic() >= self.deadline:
                self.reason = "timeout"
            else:
                continue
            self.abort()
            return

    def abort(self) -> None:
        # shutdown wakes a recv blocked in the reading thread; close alone does not
        conn = getattr(getattr(self.resp, "raw", None), "connection", None)
        sock = getattr(conn, "sock", None)
        if sock is not None:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
        try:
            self.resp.close()
        except Exception as e:
            log.debug("Closing aborted response: %s", e)

    def stop(self) -> None:
        self.done.set()


def _interrupted(url: str, timeout: float, reason: str) -> WatchError:
    if reason == "cancelled":
        return Cancelled(f"fetching {url}: cancelled")
    return FetchTimeout(f"fetching {url}: timed out after {timeout:g}s")


# None means the exception is not a fetch failure and propagates unchanged
def _fetch_error(url: str, timeout: float, e: Exception,
                 reason: Optional[str]) -> Optional[WatchError]:
    if isinstance(e, WatchError):
        return e
    if reason is not None:
        # whatever the reading thread saw after an abort is a symptom of it
        return _interrupted(url, timeout, reason)
    if isinstance(e, (requests.exceptions.MissingSchema,
                      requests.exceptions.InvalidSchema,
                      requests.exceptions.InvalidURL,
                      LocationParseError)):
        return FetchError(f"bad URL {url!r}: {e}", kind="invalid_url")
    if isinstance(e, requests.exceptions.Timeout):
        return FetchTimeout(f"fetching {url}: timed out after {timeout:g}s")
    if isinstance(e, requests.exceptions.RequestException):
        kind = classify_net_error(e)
        if kind == "timeout":
            return FetchTimeout(f"fetching {url}: timed out after {timeout:g}s")
        return FetchError(f"fetching {url}: {e}", kind=kind)
    return None

# ========================
# Notifications
# ========================

def _applescript_str(s: str) -> str:
    return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'


def notify_desktop(title: str, subtitle: str, message: str, sound: str = "Ping") -> None:
    script = (
        f"display notification {_applescript_str(message)} "
        f"with title {_applescript_str(title)} "
        f"subtitle {_applescript_str(subtitle)} "
        f"sound name {_applescript_str(sound)}"
    )
    subprocess.run(["osascript", "-e", script], check=True, capture_output=True, timeout=10)


def set_clipboard(text: str) -> None:
    subprocess.run(["pbcopy"], input=text.encode("utf-8"), check=True, timeout=10)


def send_discord(webhook_url: str, url: str, edits: int) -> None:
    embed = {
        "title": "Website Change Detected",
        "url": url,
        "description": f"URL: {url}\n{edits} edits (check console output)",
        "footer": {"text": f"Detected at {time.strftime('%Y-%m-%d %H:%M:%S')}"},
    }
    payload = {"content": None, "embeds": [embed]}
    try:
        r = requests.post(webhook_url, json=payload, timeout=15)
        if r.status_code >= 300:
            log.warning("Discord webhook returned %s: %s", r.status_code, r.text[:200])
    except requests.exceptions.RequestException as e:
        log.warning("Failed to send Discord notification for %s: %s", url, e)


class Reporter:
    """Delivers change reports: console or log, plus optional desktop side effects."""

    def __init__(self, config: WatchConfig, out=None):
        self.config = config
        self.out = out
        self._lock = threading.Lock()

    def report(self, r: Report) -> None:
        if self.config.log_full_diff:
            log.info("Site %s updated (%d edits):\n%s", r.url, r.edits, r.text)
        else:
            # avoid writing the full output to both stdout and the log
            with self._lock:
                print(f"Site {r.url} diff:\n{r.text}", file=self.out or sys.stdout, flush=True)
            log.info("Site %s updated (%d edits)", r.url, r.edits)

        if self.config.macos_notify:
            try:
                notify_desktop("Site updated", r.url, f"{r.edits} edits (check console output)")
            except (OSError, subprocess.SubprocessError) as e:
                log.warning("Desktop notification for %s failed: %s", r.url, e)
        if self.config.macos_clipboard:
            try:
                set_clipboard(r.url)
            except (OSError, subprocess.SubprocessError) as e:
                log.warning("Updating clipboard with %s failed: %s", r.url, e)
        if self.config.discord_webhook:
            send_discord(self.config.discord_webhook, r.url, r.edits)

# ========================
# Worker thread per URL
# ========================

FetchFunc = Callable[..., str]


def next_delay(interval: float, jitter: float, rng: Optional[random.Random] = None) -> float:
    if jitter <= 0:
        return interval
    return interval + (rng or random).uniform(0, jitter)


class Watcher(threading.Thread):
    def __init__(self, url: str, config: WatchConfig, store: StateStore, reporter: Reporter,
                 cancel: threading.Event, fetch: FetchFunc = fetch_text,
                 rng: Optional[random.Random] = None):
        super().__init__(name=f"watch {url}", daemon=True)
        self.url = url
        self.config = config
        self.store = store
        self.reporter = reporter
        self.cancel = cancel
        self.fetch = fetch
        self.rng = rng or random.Random()
        self.ticks = 0

    def check(self) -> Optional[Report]:
        """One fetch-compare-persist cycle. Returns a report if the page changed."""
        text = self.fetch(self.url, self.cancel,
                          timeout=self.config.request_timeout,
                          user_agent=self.config.user_agent)
        # nothing is persisted once shutdown has begun
        if self.cancel.is_set():
            raise Cancelled(f"checking {self.url}: cancelled")

        old = self.store.read(self.url)
        if old == text:
            log.debug("No change in %s", self.url)
            return None

        self.store.write(self.url, text)
        if old is None:
            log.info("First time checking %s (no previous state)", self.url)
            return Report(self.url, INITIAL_FETCH, 0)

        diff, edits = render_diff(old, text, self.config.markers)
        return Report(self.url, diff, edits)

    def tick(self) -> Optional[Report]:
        self.ticks += 1
        try:
            report = self.check()
            if report is not None:
                self.reporter.report(report)
        except WatchError as e:
            log.warning("Checking %s: %s", self.url, e)
            return None
        except Exception as e:
            # one bad cycle never ends the loop
            log.exception("Checking %s: unexpected %s: %s", self.url, type(e).__name__, e)
            return None
        return report

    def run(self) -> None:
        delay = 0.0
        while not self.cancel.wait(delay):
            self.tick()
            if self.config.repeat_every <= 0:
                log.info("Done checking %s (use --repeat-every to repeat automatically)", self.url)
                return
            delay = next_delay(self.config.repeat_every, self.config.jitter, self.rng)
            log.debug("Next fetch of %s in %.1fs", self.url, delay)
        log.debug("Stopped watching %s", self.url)

# ========================
# Monitoring orchestration
# ========================

class Supervisor:
    """Runs one Watcher per URL until they all finish or a shutdown is requested."""

    def __init__(self, urls: List[str], config: WatchConfig, store: Optional[StateStore] = None,
                 reporter: Optional[Reporter] = None, fetch: FetchFunc = fetch_text):
        self.urls = list(urls)
        self.config = config
        self.store = store or StateStore(config.state_dir)
        self.reporter = reporter or Reporter(config)
        self.cancel = threading.Event()
        self.watchers = [
            Watcher(u, config, self.store, self.reporter, self.cancel, fetch=fetch)
            for u in self.urls
        ]

    def stop(self, signum: Optional[int] = None, frame=None) -> None:
        if signum is not None:
            log.info("Received %s", signal.Signals(signum).name)
        self.cancel.set()

    def run(self, install_signals: bool = True, poll_interval: float = 0.2) -> None:
        previous = {}
        if install_signals:
            for sig in (signal.SIGINT, signal.SIGTERM):
                previous[sig] = signal.signal(sig, self.stop)
        try:
            if self.config.repeat_every > 0:
                log.info("Will check %d URLs for updates every %s (+ jitter up to %s)",
                         len(self.urls), format_duration(self.config.repeat_every),
                         format_duration(self.config.jitter))
            else:
                log.info("Will check %d URLs for updates ONCE (use --repeat-every to keep checking)",
                         len(self.urls))

            for w in self.watchers:
                w.start()
            while not self.cancel.wait(poll_interval):
                if not any(w.is_alive() for w in self.watchers):
                    break
            if self.cancel.is_set():
                log.info("Shutting down...")
            self.cancel.set()
            for w in self.watchers:
                w.join()
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)

# ========================
# Configuration & CLI
# ========================

_DURATION_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_DURATION_UNITS = {"ns": 1e-9, "us": 1e-6, "µs": 1e-6, "ms": 1e-3, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(value: str) -> float:
    """Seconds from "1h30m" / "300ms" / "2.5s" style strings or plain numbers."""
    s = value.strip()
    if not s:
        raise ValueError("empty duration")
    try:
        seconds = float(s)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            raise ValueError(f"invalid duration {value!r}")
        return seconds

    sign = 1.0
    if s[0] in "+-":
        sign = -1.0 if s[0] == "-" else 1.0
        s = s[1:]
    if not s:
        raise ValueError(f"invalid duration {value!r}")
    total = 0.0
    pos = 0
    while pos < len(s):
        m = _DURATION_RE.match(s, pos)
        if not m:
            raise ValueError(f"invalid duration {value!r}")
        total += float(m.group(1)) * _DURATION_UNITS[m.group(2)]
        pos = m.end()
    return sign * total


def format_duration(seconds: float) -> str:
    if seconds >= 3600 and seconds % 3600 == 0:
        return f"{seconds / 3600:g}h"
    if seconds >= 60 and seconds % 60 == 0:
        return f"{seconds / 60:g}m"
    return f"{seconds:g}s"


def _duration_arg(value: str) -> float:
    try:
        return parse_duration(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


EPILOG = """\
EXAMPLE:
# Check major news outlets every 5 minutes:
watchurl --repeat-every=5m --log-full-diff https://theguardian.com https://nytimes.com
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="watchurl",
        usage="%(prog)s [OPTIONS] URLS...",
        description="Monitors URLs for updates and outputs diffs.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("urls", nargs="*", metavar="URL", help="URLs to check")
    p.add_argument("--state-dir", default=DEFAULT_STATE_DIR,
                   help="directory where to cache site contents (default: %(default)s)")
    p.add_argument("--repeat-every", type=_duration_arg, default=0.0,
                   help="keep running, checking at this interval (e.g. 5m); 0 checks once")
    p.add_argument("--jitter", type=_duration_arg, default=120.0,
                   help="random jitter, if --repeat-every is used (default: 2m)")
    p.add_argument("--request-timeout", type=_duration_arg, default=30.0,
                   help="timeout for the HTTP GET requests, 0 to disable (default: 30s)")
    p.add_argument("--log-full-diff", action="store_true",
                   help="write the full diff to the log (otherwise write it to stdout)")
    p.add_argument("--macos-notify", action=argparse.BooleanOptionalAction, default=True,
                   help="(macOS only) display a desktop notification when updated")
    p.add_argument("--macos-clipboard", action=argparse.BooleanOptionalAction, default=False,
                   help="(macOS only) put the latest URL to update in the clipboard")
    p.add_argument("--discord-webhook", default=None,
                   help="also post a short notice to this Discord webhook")
    p.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header for requests")
    p.add_argument("--no-color", action="store_true", help="mark changes with {+ +} and [- -] instead of colors")
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="more logging; repeat to include HTTP library logs")
    p.add_argument("--log-file", default=None, help="also append logs to this file")
    return p


def config_from_args(args: argparse.Namespace) -> WatchConfig:
    darwin = sys.platform == "darwin"
    return WatchConfig(
        state_dir=args.state_dir,
        repeat_every=args.repeat_every,
        jitter=args.jitter,
        request_timeout=args.request_timeout,
        log_full_diff=args.log_full_diff,
        macos_notify=args.macos_notify and darwin,
        macos_clipboard=args.macos_clipboard and darwin,
        discord_webhook=args.discord_webhook,
        user_agent=args.user_agent,
        color=not args.no_color,
    )


def setup_logging(verbosity: int = 0, log_file: Optional[str] = None) -> None:
    handlers: List[logging.Handler] = [
        RichHandler(console=_err_console, show_path=False, rich_tracebacks=True),
    ]
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(threadName)s] %(message)s"))
        handlers.append(fh)
    logging.basicConfig(
        level=logging.DEBUG if verbosity >= 2 else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )
    log.setLevel(logging.DEBUG if verbosity >= 1 else logging.INFO)


def print_targets(supervisor: Supervisor) -> None:
    table = Table(title="Watched URLs", box=box.SIMPLE)
    table.add_column("#", style="bold cyan", no_wrap=True)
    table.add_column("URL", overflow="fold")
    table.add_column("State file", style="magenta", overflow="fold")
    for i, url in enumerate(supervisor.urls):
        try:
            path = supervisor.store.path_for(url)
        except ConfigurationError:
            path = "(unresolved)"
        table.add_row(str(i), url, path)
    _err_console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.urls:
        parser.error("at least one URL is required")

    setup_logging(args.verbose, args.log_file)
    config = config_from_args(args)
    if args.macos_clipboard and not config.macos_clipboard:
        log.warning("--macos-clipboard only works on macOS; ignoring")

    supervisor = Supervisor(args.urls, config)
    print_targets(supervisor)
    supervisor.run()
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        log.critical("Fatal error: %s", e)
        sys.exit(1)
