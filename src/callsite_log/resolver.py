"""Caller-location resolution.

Every log call goes through a public method of the facility, so the first
entry of a captured trace is inside the facility and the second entry is the
call site. The call site is shortened to ``relative/path:line`` by stripping
the directory it shares with the facility's own install location.

The shared directory is memoized on first use. This is wrong if the first log
call comes from an unusual place, but every later call avoids the prefix scan.
"""

import os
import re
import traceback
from types import FrameType
from typing import Optional

CallTrace = tuple[str, ...]

# Bundled/zipped code carries abbreviated paths, so only the tail is kept.
_LOOSE_PATTERN = re.compile(r"(.*:[0-9]+).*:")


def capture_trace(frame: Optional[FrameType], limit: Optional[int] = 2) -> CallTrace:
    """Render the stack from ``frame`` outward, innermost first.

    Only ``limit`` frames are walked; the facility needs its own frame and the
    call site. Pass ``limit=None`` for the whole stack.

    Entries look like ``/abs/path/module.py:42:in `function'``. Source lines
    are not loaded.
    """
    summary = traceback.StackSummary.extract(
        traceback.walk_stack(frame), limit=limit, lookup_lines=False
    )
    return tuple(f"{fs.filename}:{fs.lineno}:in `{fs.name}'" for fs in summary)


def _default_basedir() -> str:
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


class PathResolver:
    def __init__(self, basedir: Optional[str] = None) -> None:
        self._basedir = basedir
        self._memo: Optional[tuple[str, re.Pattern[str]]] = None

    @property
    def basedir(self) -> str:
        """Directory holding the facility package, computed once."""
        if self._basedir is None:
            self._basedir = _default_basedir()
        return self._basedir

    @property
    def common_basedir(self) -> Optional[str]:
        return self._memo[0] if self._memo else None

    def common_basedir_for(self, entry: str) -> str:
        """Return the directory shared by ``basedir`` and a trace entry.

        Falls back to ``basedir`` when nothing but the root is shared. The
        first result is kept for the lifetime of the resolver.

        Args:
            entry: A single line of a CallTrace

        Returns:
            str: The memoized common base directory
        """
        return self._memoize(entry)[0]

    def _memoize(self, entry: str) -> tuple[str, re.Pattern[str]]:
        memo = self._memo
        if memo is not None:
            return memo

        basedir_pieces = self.basedir.split(os.sep)
        trace_pieces = entry.split(os.sep)
        i = 0
        while (
            i < len(basedir_pieces)
            and i < len(trace_pieces)
            and basedir_pieces[i] == trace_pieces[i]
        ):
            i += 1

        common = self.basedir if i <= 1 else os.sep.join(basedir_pieces[:i])
        # Racing threads compute the same value; whichever lands last is fine.
        memo = (common, re.compile(re.escape(common + os.sep) + r"(.*:[0-9]+).*:"))
        self._memo = memo
        return memo

    def resolve(self, entry: str) -> Optional[str]:
        """Trim a trace entry to ``relative/path:line``.

        Args:
            entry: A single line of a CallTrace

        Returns:
            Optional[str]: The trimmed location, or None if the entry carries
            no recognizable ``path:line``
        """
        _, strict_pattern = self._memoize(entry)

        match = strict_pattern.search(entry)
        if match is None:
            match = _LOOSE_PATTERN.search(entry)
        return match.group(1) if match else None
