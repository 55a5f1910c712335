"""Route templates, route table and request dispatch."""

import re
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from users_api.patterns import capture_expr, name_pattern, query_expr, segment_expr

METHODS = ("GET", "POST", "PUT", "DELETE")
RESERVED_NAMES = ("query",)


class PatternError(ValueError):
    """Route template is malformed or ambiguous."""


@dataclass(frozen=True)
class Capture:
    """Named placeholder inside a route template."""

    name: str


Segment = Union[str, Capture]


def _parse_template(template: str) -> List[Segment]:
    """Split a template into literal strings and named captures."""
    if not isinstance(template, str) or not template.startswith("/"):
        raise PatternError(f"Route template must start with '/': {template!r}")

    segments: List[Segment] = []
    names: List[str] = []
    position = 0
    for match in capture_expr.finditer(template):
        name = match["name"]
        if not name_pattern.match(name):
            raise PatternError(
                f"Missing capture name at position {match.start()} in {template!r}"
            )
        if match["tail"]:
            raise PatternError(
                f"Invalid capture name '{name}{match['tail']}' in {template!r}: "
                "names may only contain letters"
            )
        if name in RESERVED_NAMES:
            raise PatternError(f"Capture name '{name}' is reserved in {template!r}")
        if name in names:
            raise PatternError(f"Duplicate capture name '{name}' in {template!r}")

        if match.start() > position:
            segments.append(template[position : match.start()])
        segments.append(Capture(name))
        names.append(name)
        position = match.end()

    if position < len(template):
        segments.append(template[position:])
    return segments


def _segments_to_regex(segments: Sequence[Segment]) -> str:
    parts = []
    for segment in segments:
        if isinstance(segment, Capture):
            parts.append(f"(?P<{segment.name}>{segment_expr})")
        else:
            parts.append(re.escape(segment))
    return "^" + "".join(parts) + query_expr + "$"  # full match


class RoutePattern:
    """Compiled route template.

    ``/users/:id`` compiles to ``^/users/(?P<id>[a-z0-9\\-_]+)(?:\\?(?P<query>.*))?$``.
    A capture matches one or more lowercase letters, digits, hyphens or
    underscores. Matching is case-sensitive and paths are not normalized,
    so ``/users/`` never matches ``/users``.
    """

    def __init__(self, template: str, segments: Sequence[Segment]) -> None:
        """Initialize pattern object."""
        self.template = template
        self.segments: Tuple[Segment, ...] = tuple(segments)
        self.names: Tuple[str, ...] = tuple(
            s.name for s in self.segments if isinstance(s, Capture)
        )
        self.route_regex = _segments_to_regex(self.segments)
        self.regex = re.compile(self.route_regex)

    @classmethod
    def compile(cls, template: str) -> "RoutePattern":
        """Compile a route template, raising PatternError when it is invalid."""
        return cls(template, _parse_template(template))

    def __eq__(self, other) -> bool:
        """Check for equality."""
        if not isinstance(other, RoutePattern):
            return NotImplemented
        return self.template == other.template

    def __hash__(self) -> int:
        return hash(self.template)

    def __repr__(self) -> str:
        return f"RoutePattern({self.template!r})"

    def match(self, path: str) -> Optional[Tuple[Dict[str, str], Optional[str]]]:
        """Return ``(params, raw_query)`` for a matching path, else None."""
        match = self.regex.fullmatch(path)
        if not match:
            return None

        params = match.groupdict()
        raw_query = params.pop("query")
        return params, raw_query


class RouteEntry:
    """Method, pattern and handler of a single route."""

    def __init__(
        self,
        method: str,
        pattern: Union[str, RoutePattern],
        handler: Callable,
        description: Optional[str] = None,
    ) -> None:
        """Initialize route object."""
        if method not in METHODS:
            raise ValueError(f"'{method}' is not a supported method")
        if not isinstance(pattern, RoutePattern):
            pattern = RoutePattern.compile(pattern)

        self.method = method
        self.pattern = pattern
        self.handler = handler
        self.description = description or handler.__doc__

    def __eq__(self, other) -> bool:
        """Check for equality."""
        if not isinstance(other, RouteEntry):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __repr__(self) -> str:
        return f"RouteEntry({self.method!r}, {self.pattern.template!r})"

    @property
    def path(self) -> str:
        """Return the route template."""
        return self.pattern.template


class RouteTable:
    """Ordered, read-only collection of routes.

    Declaration order is significant: dispatch returns the first entry that
    matches, so two entries whose patterns both match a path are resolved
    in favour of the one declared first.
    """

    def __init__(self, entries: Iterable[RouteEntry] = ()) -> None:
        """Initialize route table."""
        self._entries: Tuple[RouteEntry, ...] = tuple(entries)

    @classmethod
    def build(cls, entries: Iterable[Tuple[str, str, Callable]]) -> "RouteTable":
        """Compile ``(method, template, handler)`` triples into a table."""
        return cls(
            RouteEntry(method, path, handler) for method, path, handler in entries
        )

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> RouteEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"RouteTable({list(self._entries)!r})"


@dataclass(frozen=True)
class ParsedRequest:
    """Request line split into path parameters and raw query string."""

    method: str
    raw_path: str
    params: Dict[str, str] = field(default_factory=dict)
    raw_query: Optional[str] = None


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a dispatch."""

    matched: bool
    entry: Optional[RouteEntry] = None
    request: Optional[ParsedRequest] = None

    NOT_FOUND: ClassVar["MatchResult"]

    def __bool__(self) -> bool:
        return self.matched

    @property
    def handler(self) -> Optional[Callable[..., Any]]:
        return self.entry.handler if self.entry else None

    @property
    def params(self) -> Dict[str, str]:
        return self.request.params if self.request else {}

    @property
    def raw_query(self) -> Optional[str]:
        return self.request.raw_query if self.request else None


MatchResult.NOT_FOUND = MatchResult(matched=False)


def dispatch(table: Iterable[RouteEntry], method: str, raw_path: str) -> MatchResult:
    """Find the first route matching ``method`` and ``raw_path``."""
    for entry in table:
        if entry.method != method:
            continue
        found = entry.pattern.match(raw_path)
        if found is None:
            continue

        params, raw_query = found
        request = ParsedRequest(method, raw_path, params, raw_query)
        return MatchResult(matched=True, entry=entry, request=request)

    return MatchResult.NOT_FOUND
