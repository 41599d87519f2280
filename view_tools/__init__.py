"""View tools for Jinja2 templates: link building and recursive rendering."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("view-tools")
except PackageNotFoundError:
    __version__ = "dev"
