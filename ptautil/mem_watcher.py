"""Process memory usage sampled from ``/proc/<pid>/statm``."""

from __future__ import annotations

import logging
import re
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TextIO

_log = logging.getLogger(__name__)

_STATM_RE = re.compile(r"(\d+)(?: (\d+)){6}", re.ASCII)
_FIELD_RE = re.compile(r"\d+", re.ASCII)


@dataclass(frozen=True)
class Statm:
    """Process memory usage; every value is a number of pages."""

    size: int = 0
    resident: int = 0
    share: int = 0
    text: int = 0
    data: int = 0


def parse_statm(text: str) -> Statm:
    """Parse the contents of a statm file.

    The columns are: size resident shared text lib data dt. They must be
    separated by single spaces; surrounding whitespace is ignored.
    """
    trimmed = text.strip()
    if _STATM_RE.fullmatch(trimmed) is None:
        raise ValueError(f"unable to parse statm input: {trimmed!r}")
    values = [int(field) for field in _FIELD_RE.findall(trimmed)]
    size, resident, share, text_pages, _lib, data, _dt = values
    return Statm(size=size, resident=resident, share=share, text=text_pages, data=data)


def _read_statm(path: str) -> Statm:
    return parse_statm(Path(path).read_text())


def statm(pid: int) -> Statm:
    """Return memory usage of the process with the given pid."""
    return _read_statm(f"/proc/{pid}/statm")


def statm_self() -> Statm:
    """Return memory usage of the current process."""
    return _read_statm("/proc/self/statm")


def statm_task(process_id: int, thread_id: int) -> Statm:
    """Return memory usage of one thread of a process."""
    return _read_statm(f"/proc/{process_id}/task/{thread_id}/statm")


def rss_in_kilobytes(rss_pages: int) -> int:
    """Convert a page count into kilobytes, assuming 4 KiB pages."""
    return rss_pages * 4


def rss_in_megabytes(rss_pages: int) -> int:
    """Convert a page count into whole megabytes, assuming 4 KiB pages."""
    return rss_pages * 4 // 1024


def rss_in_gigabytes(rss_pages: int) -> int:
    """Convert a page count into whole gigabytes, assuming 4 KiB pages."""
    return rss_pages * 4 // 1024 // 1024


class MemoryWatcher:
    """Samples resident memory in a background thread and reports the peak."""

    def __init__(
        self,
        reader: Optional[Callable[[], Statm]] = None,
        interval: float = 0.1,
        out: Optional[TextIO] = None,
    ) -> None:
        self._reader = reader if reader is not None else statm_self
        self.interval = interval
        self._out = out
        try:
            self.init_resident = self._reader().resident
        except (OSError, ValueError):
            _log.error("Unable to parse the statm file")
            self.init_resident = 0
        self._max_resident = 0
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def max_resident(self) -> int:
        """The largest resident page count seen so far."""
        with self._lock:
            return self._max_resident

    def _poll(self) -> None:
        while True:
            try:
                sample = self._reader()
            except (OSError, ValueError):
                pass
            else:
                with self._lock:
                    if sample.resident > self._max_resident:
                        self._max_resident = sample.resident
            if self._stop_event.wait(self.interval):
                break

    def start(self) -> None:
        """Begin sampling in a background thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._poll, daemon=True)
        self._thread.start()

    def stop(self) -> int:
        """Stop sampling, print the memory report and return the peak page count."""
        if self._thread is not None:
            self._stop_event.set()
            self._thread.join()
            self._thread = None
        peak = self.max_resident
        out = self._out if self._out is not None else sys.stdout
        print(f"Used Memory Before Analysis: {rss_in_megabytes(self.init_resident)} MB", file=out)
        print(f"Max Memory in Analysis: {rss_in_megabytes(peak)} MB", file=out)
        return peak

    def __enter__(self) -> "MemoryWatcher":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()