"""
Mustache rendering for standup text.

Notion entries can use these tags:
    {{day_of_week}} - Current day of the week (e.g. "Tuesday")
    {{fortune}}     - A random fortune (see fortune.py)
    {{sotd}}        - The song of the day line, when folded into the context
"""

import re
from datetime import date
from typing import Any, Dict, Optional

import pystache


def build_template_context(today: date, fortune: str, sotd: Optional[str] = None) -> Dict[str, str]:
    """Build the variables available to every rendered section."""
    context = {
        "day_of_week": today.strftime("%A"),
        "fortune": fortune,
    }
    if sotd is not None:
        context["sotd"] = sotd
    return context


def replace_jira_links(text: str, project_id: str, project_url: str) -> str:
    """Turn issue keys like PLS-1234 into markdown links."""
    if not project_id:
        return text
    pattern = re.compile(rf"(?<!\w)({re.escape(project_id)}-\d+)")
    return pattern.sub(lambda m: f"[{m.group(1)}]({project_url}{m.group(1)})", text)


class TemplateRenderer:
    """Applies issue links and mustache substitution to section text."""

    def __init__(
        self,
        context: Dict[str, Any],
        jira_project_id: str = "",
        jira_project_url: str = "",
        escape_output: bool = False,
    ):
        self.context = context
        self.jira_project_id = jira_project_id
        self.jira_project_url = jira_project_url
        self.escape_output = escape_output
        if escape_output:
            self._renderer = pystache.Renderer(missing_tags="ignore")
        else:
            self._renderer = pystache.Renderer(escape=lambda u: u, missing_tags="ignore")

    def render(self, text: str) -> str:
        linked = replace_jira_links(text, self.jira_project_id, self.jira_project_url)
        return self._renderer.render(linked, self.context)
