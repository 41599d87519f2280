"""Request data shared with the view tools.

A ViewContext is a read-only snapshot of what a tool may know about the
current request: where the application is mounted, which path was requested,
the query parameters and how rendered links must be encoded.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from fastapi import Request

if TYPE_CHECKING:
    from view_tools.config import Settings

DEFAULT_PORTS = {"http": 80, "https": 443}


def _identity(url: str) -> str:
    return url


@dataclass(frozen=True)
class ViewContext:
    """Ambient request data for the view tools.

    Attributes:
        scheme: URL scheme of the request ("http" or "https")
        host: Server host name
        port: Server port, None when the request used the scheme default
        context_path: Path the application is mounted under ("" or "/" for the root)
        path: Request path, including the context path
        parameters: Request parameters, name -> list of values, in request order
        encoding: Charset used to percent-encode link components
        xhtml: Whether rendered links should use "&amp;" between query pairs
        url_rewriter: Hook applied to every fully rendered link (session tracking)
        attributes: Extra values made available to tools
    """

    scheme: str = "http"
    host: str = "localhost"
    port: int | None = None
    context_path: str = ""
    path: str = "/"
    parameters: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    encoding: str = "utf-8"
    xhtml: bool = False
    url_rewriter: Callable[[str], str] = _identity
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        params = {str(name): tuple(values) for name, values in self.parameters.items()}
        object.__setattr__(self, "parameters", MappingProxyType(params))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def effective_port(self) -> int | None:
        """Port of the request, falling back to the scheme default."""
        if self.port is not None:
            return self.port
        return DEFAULT_PORTS.get(self.scheme)

    @property
    def request_path(self) -> str:
        """Request path relative to the context path."""
        root = self.context_path.rstrip("/")
        if root and (self.path == root or self.path.startswith(root + "/")):
            return self.path[len(root) :] or "/"
        return self.path

    @classmethod
    def from_request(
        cls,
        request: Request,
        settings: "Settings | None" = None,
        url_rewriter: Callable[[str], str] | None = None,
    ) -> "ViewContext":
        """Build a view context from a FastAPI/Starlette request.

        Args:
            request: Incoming request
            settings: Settings providing output encoding and the XHTML flag
            url_rewriter: Optional hook applied to rendered links

        Returns:
            ViewContext snapshot of the request
        """
        parameters: dict[str, list[str]] = {}
        for name, value in request.query_params.multi_items():
            parameters.setdefault(name, []).append(value)

        url = request.url
        return cls(
            scheme=url.scheme,
            host=url.hostname or "localhost",
            port=url.port,
            context_path=request.scope.get("root_path", ""),
            path=request.scope.get("path", url.path),
            parameters={name: tuple(values) for name, values in parameters.items()},
            encoding=settings.output_encoding if settings else "utf-8",
            xhtml=settings.xhtml if settings else False,
            url_rewriter=url_rewriter or _identity,
            attributes={"request": request},
        )
