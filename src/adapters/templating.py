"""
Jinja2 environment shared by the email and pass document adapters.

Templates live in src/adapters/templates/. Email bodies are under email/
and are addressed by the template name carried on EmailMessage.
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@lru_cache
def get_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
    )


def render_email_html(template: str, params: dict[str, str]) -> str:
    """Render the email body registered under `template`."""
    return get_environment().get_template(f"email/{template}.html").render(**params)
