"""Unit tests for the toolbox."""

from conftest import make_request, make_settings
from fastapi.templating import Jinja2Templates

from view_tools.tools import LinkTool, RenderTool
from view_tools.toolbox import Toolbox


class TestToolbox:
    """Tests for per-request tools."""

    def test_tools_for_request(self):
        """Test each request gets its own link tool and the shared render tool."""
        toolbox = Toolbox(make_settings())
        request = make_request(path="/catalog/list")

        first = toolbox.tools_for(request)
        second = toolbox.tools_for(request)

        assert isinstance(first["link"], LinkTool)
        assert first["link"] is not second["link"]
        assert isinstance(first["render"], RenderTool)
        assert first["render"] is second["render"] is toolbox.render_tool

    def test_link_configured_from_settings(self):
        """Test settings reach the link tool."""
        toolbox = Toolbox(make_settings(self_absolute=True, xhtml=True))
        link = toolbox.link_for(make_request(path="/catalog/list"))

        assert str(link.get_self()) == "http://example.com:8080/catalog/list"
        assert link.query_delimiter == "&amp;"

    def test_self_include_parameters_from_settings(self):
        """Test self links carry request parameters when configured."""
        toolbox = Toolbox(make_settings(self_include_parameters=True))
        link = toolbox.link_for(make_request(path="/catalog/list", query_string=b"page=2"))

        assert str(link.get_self()) == "/catalog/list?page=2"

    def test_render_tool_configured_from_settings(self):
        """Test settings reach the render tool."""
        toolbox = Toolbox(make_settings(parse_depth=4, catch_exceptions=False))

        assert toolbox.render_tool.parse_depth == 4
        assert toolbox.render_tool.catch_exceptions is False

    def test_url_rewriter_applied(self):
        """Test the toolbox URL rewriter reaches rendered links."""
        toolbox = Toolbox(make_settings(), url_rewriter=lambda url: url + ";sid=1")
        link = toolbox.link_for(make_request())

        assert str(link.relative("x")) == "/x;sid=1"


class TestInstall:
    """Tests for installing the toolbox on Jinja2 templates."""

    def _templates(self, tmp_path, **settings):
        templates = Jinja2Templates(directory=tmp_path)
        return Toolbox(make_settings(**settings)).install(templates)

    def test_install_registers_processor_and_filters(self, tmp_path):
        """Test install adds the context processor and filters."""
        templates = self._templates(tmp_path)

        assert len(templates.context_processors) == 1
        assert "eval" in templates.env.filters
        assert "recurse" in templates.env.filters

    def test_context_processor_exposes_tools(self, tmp_path):
        """Test the context processor returns the tools for a request."""
        templates = self._templates(tmp_path)

        tools = templates.context_processors[0](make_request())

        assert set(tools) == {"link", "render"}

    def test_recurse_filter(self, tmp_path):
        """Test the recurse filter renders against the template's own context."""
        templates = self._templates(tmp_path)
        template = templates.env.from_string("{{ snippet|recurse }}")

        assert template.render(snippet="{{ inner }}", inner="{{ value }}", value="done") == "done"

    def test_eval_filter_not_escaped_twice(self, tmp_path):
        """Test evaluated markup is escaped once."""
        templates = self._templates(tmp_path)
        template = templates.env.from_string("{{ snippet|eval }}")

        assert template.render(snippet="<b>{{ name }}</b>", name="<i>") == "<b>&lt;i&gt;</b>"

    def test_eval_filter_failure_renders_empty(self, tmp_path):
        """Test a failing snippet renders as an empty string."""
        templates = self._templates(tmp_path)
        template = templates.env.from_string("[{{ snippet|eval }}]")

        assert template.render(snippet="{% if %}") == "[]"

    def test_render_tool_uses_templates_environment(self, tmp_path):
        """Test the render tool evaluates with the templates' environment."""
        templates = Jinja2Templates(directory=tmp_path)
        toolbox = Toolbox(make_settings())
        toolbox.install(templates)

        assert toolbox.render_tool.environment is templates.env

    def test_link_tool_in_template_response(self, tmp_path):
        """Test templates rendered through TemplateResponse see the link tool."""
        (tmp_path / "page.html").write_text("{{ link.relative('search').param('q', 'a b') }}", encoding="utf-8")
        templates = self._templates(tmp_path)

        response = templates.TemplateResponse(make_request(), "page.html", {})

        assert response.body == b"/search?q=a+b"
