"""Pass document adapters."""

from .renderer import WeasyPrintPassRenderer, render_pass_html

__all__ = ["WeasyPrintPassRenderer", "render_pass_html"]
