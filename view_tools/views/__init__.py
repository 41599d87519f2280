"""View rendering module for HTML templates.

Views prepare context data and render Jinja2 templates; the toolbox adds
the link and render tools to every template context.
"""
