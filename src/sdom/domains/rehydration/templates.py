"""JavaScript templates for the rehydration bootstrap script.

Templates use ``{placeholder}`` markers. Every value substituted into a
template is either generated code or a literal produced by
``js_literal``, so recorded data can never break out of a string or of
the surrounding script element.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional, Tuple

from sdom.domains.rehydration.value_objects import (
    BootstrapEntry,
    BootstrapPlan,
    LookupStrategy,
)


def js_literal(value: str) -> str:
    """Encode a Python string as a JavaScript string literal safe inside <script>."""
    return json.dumps(value).replace("</", "<\\/")


@dataclass(frozen=True)
class ScriptTemplate:
    """Template text with declared placeholders.

    Attributes:
        template_id: Unique identifier for the template
        content: Template text with {placeholder} markers
        placeholders: Tuple of expected placeholder names
    """
    template_id: str
    content: str
    placeholders: Tuple[str, ...] = field(default_factory=tuple)

    PLACEHOLDER_PATTERN: ClassVar[re.Pattern] = re.compile(r"\{(\w+)\}")

    def __post_init__(self) -> None:
        """Validate that declared and used placeholders agree."""
        found = frozenset(self.PLACEHOLDER_PATTERN.findall(self.content))
        declared = frozenset(self.placeholders)
        if found != declared:
            raise ValueError(
                f"Placeholder mismatch in '{self.template_id}': found {sorted(found)}, "
                f"declared {sorted(declared)}"
            )

    def render(self, context: Dict[str, str]) -> str:
        missing = [name for name in self.placeholders if name not in context]
        if missing:
            raise KeyError(f"Missing template values for '{self.template_id}': {missing}")
        # Single substitution pass: inserted values are never re-scanned
        return self.PLACEHOLDER_PATTERN.sub(lambda m: context[m.group(1)], self.content)


# Report helper: posts {id, eventType} with the identity recorded on the server
REPORT_HELPER = ScriptTemplate(
    template_id="report_helper",
    content='''  function sdomReport(eventType, id) {
    var body = JSON.stringify({
      id: id,
      eventType: eventType
    });
    var url = {report_url};
    if (window.fetch) {
      window.fetch(url, {
        method: "POST",
        headers: { "Content-Type": "application/json" },
        body: body,
        keepalive: true
      });
      return;
    }
    var xhr = new XMLHttpRequest();
    xhr.open("POST", url, true);
    xhr.setRequestHeader("Content-Type", "application/json");
    xhr.send(body);
  }
''',
    placeholders=("report_url",),
)

ELEMENT_LOOKUP = ScriptTemplate(
    template_id="element_lookup",
    content="  var {var_name} = {lookup};\n",
    placeholders=("var_name", "lookup"),
)

EVENT_BINDING = ScriptTemplate(
    template_id="event_binding",
    content=(
        "  if ({var_name}) {var_name}.addEventListener({event_type}, function () {"
        " sdomReport({event_type}, {identity}); });\n"
    ),
    placeholders=("var_name", "event_type", "identity"),
)

BOOTSTRAP = ScriptTemplate(
    template_id="bootstrap",
    content='''(function () {
  "use strict";
{report_helper}{lookups}{bindings}}());
''',
    placeholders=("report_helper", "lookups", "bindings"),
)

# Default report target: the page's own address
PAGE_ADDRESS = "window.location.href"


def lookup_expression(entry: BootstrapEntry) -> str:
    """JavaScript expression resolving an entry's element in the browser."""
    if entry.lookup.strategy is LookupStrategy.ELEMENT_ID:
        return f"document.getElementById({js_literal(entry.lookup.value)})"
    return f"document.querySelector({js_literal(entry.lookup.value)})"


@dataclass(frozen=True)
class BootstrapTemplate:
    """Renders a BootstrapPlan into the bootstrap script text."""
    report_url: Optional[str] = None

    def render(self, plan: BootstrapPlan) -> str:
        report_url = js_literal(self.report_url) if self.report_url else PAGE_ADDRESS
        lookups = []
        bindings = []
        for index, entry in enumerate(plan.entries):
            var_name = f"sdomEl{index}"
            lookups.append(
                ELEMENT_LOOKUP.render({"var_name": var_name, "lookup": lookup_expression(entry)})
            )
            for event_type in entry.event_types:
                bindings.append(
                    EVENT_BINDING.render({
                        "var_name": var_name,
                        "event_type": js_literal(event_type),
                        "identity": js_literal(entry.sdom_id.value),
                    })
                )
        return BOOTSTRAP.render({
            "report_helper": REPORT_HELPER.render({"report_url": report_url}),
            "lookups": "".join(lookups),
            "bindings": "".join(bindings),
        })
