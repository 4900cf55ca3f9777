# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Jinja2 rendering for the configurable rollup text."""

from functools import lru_cache
from typing import Any, Mapping

import jinja2

from .errors import ReleaseNotesError


_environment = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


class TemplateError(ReleaseNotesError):
    """A configured template does not parse or refers to an unknown variable."""


@lru_cache(maxsize=64)
def _compile(source: str) -> jinja2.Template:
    try:
        return _environment.from_string(source)
    except jinja2.TemplateSyntaxError as e:
        raise TemplateError(f"Invalid template syntax in {source!r}: {e.message}") from e


def render_template(template_str: str, context: Mapping[str, Any]) -> str:
    """
    Render ``template_str`` with ``context``.

    Raises:
        TemplateError: on a syntax error or a variable missing from ``context``
    """
    template = _compile(template_str)
    try:
        return template.render(context)
    except jinja2.UndefinedError as e:
        raise TemplateError(f"Template {template_str!r} uses undefined variable: {e.message}") from e


def render_rollup_text(template_str: str, milestone: str, owner: str) -> str:
    """Render one of the rollup templates for ``milestone`` under ``owner``."""
    return render_template(template_str, {'milestone': milestone, 'owner': owner})
