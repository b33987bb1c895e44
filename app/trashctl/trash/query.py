"""Query matching against original paths.

Every mode compiles its patterns up front so that a malformed pattern is
reported as a configuration error before any entry is examined.
"""

import fnmatch
import re
from collections.abc import Callable, Sequence

from trashctl.trash.errors import ConfigError
from trashctl.trash.models import QueryMode

Matcher = Callable[[str], bool]


class QueryMatcher:
    """Matches original paths against a list of queries.

    An empty query list matches every path. Otherwise a path matches if
    it matches any one of the queries.

    Args:
        queries: Free-text queries.
        mode: Matching mode.

    Raises:
        ConfigError: If a regex or glob pattern is malformed.
    """

    def __init__(self, queries: Sequence[str], mode: QueryMode = QueryMode.REGEX) -> None:
        self._mode = mode
        self._matchers: list[Matcher] = [_compile(q, mode) for q in queries]

    @property
    def mode(self) -> QueryMode:
        """Matching mode in use."""
        return self._mode

    def matches(self, path: str) -> bool:
        """Check whether a path matches any query."""
        if not self._matchers:
            return True
        return any(m(path) for m in self._matchers)


def _compile(query: str, mode: QueryMode) -> Matcher:
    """Build the match function for one query."""
    if mode == QueryMode.REGEX:
        try:
            pattern = re.compile(query)
        except re.error as e:
            raise ConfigError(f"Invalid regex {query!r}: {e}") from e
        return lambda path: pattern.search(path) is not None

    if mode == QueryMode.GLOB:
        _check_glob(query)
        return lambda path: fnmatch.fnmatchcase(path, query)

    if mode == QueryMode.LITERAL:
        needle = query.casefold()
        return lambda path: needle in path.casefold()

    if mode == QueryMode.FULL:
        return lambda path: path == query

    raise ConfigError(f"Unknown query mode: {mode}")


def _check_glob(query: str) -> None:
    """Reject glob patterns with an unterminated character class."""
    i = 0
    while i < len(query):
        if query[i] == "[":
            # ']' directly after '[' or '[!' is a literal member
            j = i + 1
            if j < len(query) and query[j] == "!":
                j += 1
            if j < len(query) and query[j] == "]":
                j += 1
            close = query.find("]", j)
            if close == -1:
                raise ConfigError(f"Invalid glob {query!r}: unterminated '['")
            i = close
        i += 1
