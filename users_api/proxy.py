"""Translate HTTP requests into handler calls."""

import json
import logging
import sys
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import parse_qs

from users_api import StatusCode
from users_api.routing import RouteEntry, RouteTable, dispatch
from users_api.types import Request, Response


def extract_query_params(raw_query: Optional[str]) -> Dict[str, str]:
    """Parse ``a=1&b=2`` into a mapping, keeping the first value of each key."""
    if not raw_query:
        return {}

    parsed = parse_qs(raw_query, keep_blank_values=True)
    return {key: values[0] if values else "" for key, values in parsed.items()}


def parse_json_body(body: Optional[bytes]) -> Any:
    """Decode a JSON request body, None when it is empty or invalid."""
    if not body:
        return None
    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None


def _error(status_code: StatusCode, message: str) -> Response:
    return Response(
        status_code=status_code,
        content_type="application/json",
        body=json.dumps({"errorMessage": message}),
    )


class API:
    """API."""

    FORMAT_STRING = "[%(name)s] - [%(levelname)s] - %(message)s"

    def __init__(
        self,
        name: str,
        version: str = "0.0.1",
        description: Optional[str] = None,
        configure_logs: bool = True,
        debug: bool = False,
    ) -> None:
        """Initialize API object."""
        self.name: str = name
        self.description: Optional[str] = description
        self.version: str = version
        self.routes: List[RouteEntry] = []
        self.debug: bool = debug
        self.log = logging.getLogger(self.name)
        self._table: Optional[RouteTable] = None
        if configure_logs:
            self._configure_logging()

    @property
    def table(self) -> RouteTable:
        """Route table of every registered route, in declaration order."""
        if self._table is None:
            self._table = RouteTable(self.routes)
        return self._table

    def _configure_logging(self) -> None:
        if self._already_configured(self.log):
            return

        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(self.FORMAT_STRING)
        handler.setFormatter(formatter)
        self.log.propagate = False
        if self.debug:
            level = logging.DEBUG
        else:
            level = logging.ERROR
        self.log.setLevel(level)
        self.log.addHandler(handler)

    def _already_configured(self, log) -> bool:
        if not log.handlers:
            return False

        for handler in log.handlers:
            if isinstance(handler, logging.StreamHandler):
                if handler.stream == sys.stdout:
                    return True

        return False

    def _add_route(self, path: str, endpoint: Callable, **kwargs) -> List[RouteEntry]:
        methods = kwargs.pop("methods", ["GET"])
        description = kwargs.pop("description", None)

        if kwargs:
            raise TypeError(
                f"TypeError: route() got unexpected keyword "
                f"arguments: {', '.join(list(kwargs))}"
            )

        entries = [
            RouteEntry(method, path, endpoint, description) for method in methods
        ]
        self.routes.extend(entries)
        self._table = None
        self.log.debug(f"Registered {', '.join(methods)} {path}")
        return entries

    def route(self, path: str, **kwargs) -> Callable:
        """Register route."""

        def _register_view(endpoint):
            self._add_route(path, endpoint, **kwargs)
            return endpoint

        return _register_view

    def get(self, path: str, **kwargs) -> Callable:
        """Register GET route."""
        kwargs["methods"] = ["GET"]
        return self.route(path, **kwargs)

    def post(self, path: str, **kwargs) -> Callable:
        """Register POST route."""
        kwargs["methods"] = ["POST"]
        return self.route(path, **kwargs)

    def put(self, path: str, **kwargs) -> Callable:
        """Register PUT route."""
        kwargs["methods"] = ["PUT"]
        return self.route(path, **kwargs)

    def delete(self, path: str, **kwargs) -> Callable:
        """Register DELETE route."""
        kwargs["methods"] = ["DELETE"]
        return self.route(path, **kwargs)

    def __call__(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[bytes] = b"",
    ) -> Response:
        """Route a request to its handler and return the handler response."""
        self.log.debug(f"{method} {path}")

        headers = dict((key.lower(), value) for key, value in (headers or {}).items())

        result = dispatch(self.table, method, path)
        if not result:
            error_message = f"No view function for: {method} - {path}"
            self.log.debug(error_message)
            return _error(StatusCode.NOT_FOUND, error_message)

        request = Request(
            method=method,
            path=path,
            params=result.params,
            query=extract_query_params(result.raw_query),
            body=parse_json_body(body),
            headers=headers,
        )

        try:
            response = result.handler(request)
        except Exception as err:
            self.log.error(str(err))
            response = _error(StatusCode.INTERNAL_SERVER_ERROR, str(err))

        return response

