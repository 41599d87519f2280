"""Link building tool for templates.

LinkTool values are immutable: every setter returns a new LinkTool, so a
single configured tool can be shared by any number of templates and each
chain of calls builds its own link.

Example template usage:

    <a href="{{ link.relative('search').param('q', query).anchor('results') }}">
    <a href="{{ link.self_link.param('page', 2) }}">
"""

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote_plus

from view_tools.config import LinkToolConfig, parse_tool_params
from view_tools.context import DEFAULT_PORTS, ViewContext
from view_tools.exceptions import ToolInitializationException
from view_tools.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

HTML_QUERY_DELIMITER = "&"
XHTML_QUERY_DELIMITER = "&amp;"


@dataclass(frozen=True)
class QueryPair:
    """One key with its value(s) in a link's query string.

    The value is None (rendered as "key="), a sequence (one "key=value"
    per element, None elements rendered as "key=") or anything else
    (rendered with str()).
    """

    key: str
    value: Any = None

    def render(self, encode: Callable[[str], str], delimiter: str) -> str:
        """Serialize this pair, encoding key and values with `encode`."""
        encoded_key = encode(self.key)
        if self.value is None:
            return f"{encoded_key}="
        if isinstance(self.value, (list, tuple)):
            return delimiter.join(
                f"{encoded_key}=" + ("" if item is None else encode(str(item))) for item in self.value
            )
        return f"{encoded_key}={encode(str(self.value))}"


class LinkTool:
    """Immutable link builder with query data, anchor and self links."""

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._uri: str | None = None
        self._anchor: str | None = None
        self._query_data: tuple[QueryPair, ...] = ()
        self._query_delimiter = HTML_QUERY_DELIMITER
        self._ignored: frozenset[str] = frozenset()
        self._auto_ignore = True
        self._self_absolute = False
        self._self_include_parameters = False

    # ── Toolbox lifecycle ───────────────────────────────────────────

    def configure(self, params: Mapping[str, Any] | None) -> None:
        """Apply toolbox parameters.

        Recognized keys are "self-absolute", "self-include-parameters" and
        "auto-ignore-parameters". Missing keys leave the current setting.

        Raises:
            ConfigurationException: If a value cannot be read as a boolean
        """
        config = parse_tool_params(LinkToolConfig, params)
        if config.self_absolute is not None:
            self._self_absolute = config.self_absolute
        if config.self_include_parameters is not None:
            self._self_include_parameters = config.self_include_parameters
        if config.auto_ignore_parameters is not None:
            self._auto_ignore = config.auto_ignore_parameters

    def init(self, obj: object) -> None:
        """Bind this tool to the current request.

        Raises:
            ToolInitializationException: If obj is not a ViewContext
        """
        if not isinstance(obj, ViewContext):
            raise ToolInitializationException(details={"received": type(obj).__name__})
        self._context = obj
        self._query_delimiter = XHTML_QUERY_DELIMITER if obj.xhtml else HTML_QUERY_DELIMITER
        log_with_context(
            logger,
            "debug",
            "Link tool initialized",
            path=obj.path,
            xhtml=obj.xhtml,
            event_type="link_tool_init",
        )

    def duplicate(self) -> "LinkTool":
        """Return an independent copy of this link.

        All state is held in immutable containers so a shallow copy never
        shares anything a later change could alter.
        """
        return copy.copy(self)

    @property
    def _view(self) -> ViewContext:
        if self._context is None:
            raise ToolInitializationException("LinkTool has not been initialized with a ViewContext")
        return self._context

    # ── Copy helpers ────────────────────────────────────────────────

    def _copy_with_uri(self, uri: str | None) -> "LinkTool":
        link = self.duplicate()
        link._uri = uri
        return link

    def _copy_with_anchor(self, anchor: str | None) -> "LinkTool":
        link = self.duplicate()
        link._anchor = anchor
        return link

    def _copy_with_pairs(self, pairs: tuple[QueryPair, ...]) -> "LinkTool":
        link = self.duplicate()
        link._query_data = self._query_data + pairs
        if link._auto_ignore:
            missing = {pair.key for pair in pairs} - self._ignored
            # Only build a new ignore set if something changes
            if missing:
                link._ignored = self._ignored | missing
        return link

    def _copy_with_ignore(self, name: str) -> "LinkTool":
        link = self.duplicate()
        link._ignored = self._ignored | {name}
        return link

    # ── Template methods ────────────────────────────────────────────

    def set_anchor(self, anchor: str | None) -> "LinkTool":
        """Return a copy of this link with the given anchor (fragment)."""
        return self._copy_with_anchor(anchor)

    def anchor(self, anchor: str | None) -> "LinkTool":
        return self.set_anchor(anchor)

    def get_anchor(self) -> str | None:
        return self._anchor

    def set_relative(self, uri: str) -> "LinkTool":
        """Return a copy of this link with a URI relative to the context path.

        "foo" under context path "/app" becomes "/app/foo"; under the root
        context it becomes "/foo".
        """
        ctx_path = self._view.context_path
        if ctx_path == "/":
            ctx_path = ""
        if uri.startswith("/"):
            return self._copy_with_uri(ctx_path + uri)
        return self._copy_with_uri(f"{ctx_path}/{uri}")

    def relative(self, uri: str) -> "LinkTool":
        return self.set_relative(uri)

    def set_absolute(self, uri: str) -> "LinkTool":
        """Return a copy of this link with an absolute URI.

        URIs starting with "http" are taken as they are, anything else is
        resolved against the context URL.
        """
        if uri.startswith("http"):
            return self.set_uri(uri)
        full_ctx = self.get_context_url()
        if uri.startswith("/"):
            return self._copy_with_uri(full_ctx + uri)
        return self._copy_with_uri(f"{full_ctx}/{uri}")

    def absolute(self, uri: str) -> "LinkTool":
        return self.set_absolute(uri)

    def set_uri(self, uri: str | None) -> "LinkTool":
        """Return a copy of this link with the URI set verbatim."""
        return self._copy_with_uri(uri)

    def uri(self, uri: str | None) -> "LinkTool":
        return self.set_uri(uri)

    def get_uri(self) -> str | None:
        return self._uri

    def add_query_data(self, key: Any, value: Any = None) -> "LinkTool":
        """Return a copy of this link with one more query pair.

        With auto-ignore enabled the key is also added to the names
        add_all_parameters() skips.
        """
        return self._copy_with_pairs((QueryPair(str(key), value),))

    def param(self, key: Any, value: Any = None) -> "LinkTool":
        return self.add_query_data(key, value)

    def add_query_data_map(self, parameters: Mapping[Any, Any] | None) -> "LinkTool":
        """Return a copy of this link with every entry of `parameters` appended.

        An empty or missing mapping returns this same link.
        """
        if not parameters:
            return self
        return self._copy_with_pairs(tuple(QueryPair(str(key), value) for key, value in parameters.items()))

    def params(self, parameters: Mapping[Any, Any] | None) -> "LinkTool":
        return self.add_query_data_map(parameters)

    def get_query_data(self) -> str | None:
        """Return the encoded query string, or None when there is no query data."""
        if not self._query_data:
            return None
        return self._query_delimiter.join(
            pair.render(self.encode_url, self._query_delimiter) for pair in self._query_data
        )

    def get_params(self) -> str | None:
        return self.get_query_data()

    @property
    def query_data(self) -> tuple[QueryPair, ...]:
        return self._query_data

    @property
    def query_delimiter(self) -> str:
        return self._query_delimiter

    @property
    def ignored_parameters(self) -> frozenset[str]:
        return self._ignored

    def add_ignore(self, parameter_name: str) -> "LinkTool":
        """Return a copy of this link that skips `parameter_name` in add_all_parameters()."""
        return self._copy_with_ignore(parameter_name)

    def add_all_parameters(self) -> "LinkTool":
        """Return a copy of this link with all request parameters appended.

        Parameters in the ignore set are left out. All pairs are added in a
        single copy.
        """
        parameters = {
            name: list(values) for name, values in self._view.parameters.items() if name not in self._ignored
        }
        return self._copy_with_pairs(tuple(QueryPair(name, values) for name, values in parameters.items()))

    def get_context_url(self) -> str:
        """Return scheme://host[:port] plus the context path.

        The port is left out when it is the default for http or https.
        """
        view = self._view
        out = f"{view.scheme}://{view.host}"
        default_port = DEFAULT_PORTS.get(view.scheme)
        port = view.effective_port
        if default_port is not None and port != default_port:
            out += f":{port}"
        return out + view.context_path.rstrip("/")

    def get_context_path(self) -> str:
        return self._view.context_path

    def get_request_path(self) -> str:
        return self._view.request_path

    def get_base_ref(self) -> str:
        """Return the full URL of the current request, without query data."""
        return self.get_context_url() + self.get_request_path()

    def get_self(self) -> "LinkTool":
        """Return a link to the current request.

        The link is absolute when "self-absolute" is configured and carries
        the request parameters (minus ignored ones) when
        "self-include-parameters" is configured.
        """
        if self._self_absolute:
            link = self.uri(self.get_base_ref())
        else:
            link = self.relative(self.get_request_path())
        if self._self_include_parameters:
            link = link.add_all_parameters()
        return link

    context_url = property(get_context_url)
    context_path = property(get_context_path)
    request_path = property(get_request_path)
    base_ref = property(get_base_ref)
    self_link = property(get_self)
    params_string = property(get_query_data)

    def encode_url(self, url: str) -> str:
        """Percent-encode `url` with the response charset (spaces become '+')."""
        encoding = self._context.encoding if self._context else "utf-8"
        # Characters the charset cannot represent become "?"
        return quote_plus(url, encoding=encoding, errors="replace")

    def render(self) -> str:
        """Render the full link: URI, query data and anchor.

        The result is passed through the context's URL rewriter, unless it
        is empty.
        """
        out = []
        if self._uri is not None:
            out.append(self._uri)

        query = self.get_query_data()
        if query is not None:
            if self._uri is None or "?" not in self._uri:
                out.append("?")
            else:
                # URI already carries query data
                out.append(self._query_delimiter)
            out.append(query)

        if self._anchor is not None:
            out.append("#")
            out.append(self.encode_url(self._anchor))

        result = "".join(out)
        if not result or self._context is None:
            return result
        return self._context.url_rewriter(result)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"LinkTool(uri={self._uri!r}, anchor={self._anchor!r}, query_data={self._query_data!r})"
