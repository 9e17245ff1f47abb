from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

if TYPE_CHECKING:  # pragma: no cover
    from .location import LocationView

TEMPLATE_DIR = Path(__file__).parent / "templates"

_ENV: Environment | None = None


def _env() -> Environment:
    global _ENV
    if _ENV is None:
        loader = FileSystemLoader(TEMPLATE_DIR)
        _ENV = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
    return _ENV


def render_location_section(view: "LocationView") -> str:
    return _env().get_template("location_section.html.j2").render(view=view)


def render_location_document(view: "LocationView", section: str | None = None) -> str:
    if section is None:
        section = render_location_section(view)
    template = _env().get_template("location.html.j2")
    return template.render(title=f"Weather Report: {view.name}", section=Markup(section))


def render_combined_document(title: str, generated: str, sections: Sequence[str]) -> str:
    template = _env().get_template("combined.html.j2")
    return template.render(
        title=title,
        generated=generated,
        sections=[Markup(section) for section in sections],
    )


def format_generated(dt: datetime) -> str:
    return dt.strftime("%b %d, %Y %I:%M %p %Z").strip()
