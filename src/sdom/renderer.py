"""Server-side page rendering with event rehydration.

PageRenderer drives one complete render of a page: it builds the DOM,
executes server-context scripts in document order through a ScriptRunner,
and serializes the result with the bootstrap script injected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

import sdom
from sdom.config import SdomConfig, load_config
from sdom.container import get_container
from sdom.dom import Window, parse_into
from sdom.domains.rehydration import BootstrapPlan

logger = logging.getLogger(__name__)


@runtime_checkable
class ScriptRunner(Protocol):
    """Executes the source of a script element during the server pass."""

    def can_run(self, script: Any) -> bool: ...

    def run(self, script: Any, source: str, window: Any) -> None: ...


@dataclass
class PythonScriptRunner:
    """Runs scripts written in Python.

    The script sees ``window``, ``document`` and ``script`` (its own
    element) as globals. Exceptions propagate to the caller.
    """
    script_types: Tuple[str, ...] = ("text/python", "python", "py")

    def can_run(self, script: Any) -> bool:
        script_type = (script.get_attribute("type") or "").strip().lower()
        return script_type in self.script_types

    def run(self, script: Any, source: str, window: Any) -> None:
        namespace: Dict[str, Any] = {
            "__name__": "__sdom_script__",
            "window": window,
            "document": window.document,
            "script": script,
        }
        code = compile(source, f"<script {script.get_attribute('src') or 'inline'}>", "exec")
        exec(code, namespace)


@dataclass
class RenderResult:
    """Outcome of one page render."""
    markup: str
    plan: BootstrapPlan
    session_id: str
    executed_scripts: int = 0
    skipped_scripts: int = 0
    stats: Dict[str, object] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "executed_scripts": self.executed_scripts,
            "skipped_scripts": self.skipped_scripts,
            "plan": self.plan.to_dict(),
            "stats": self.stats,
        }


class PageRenderer:
    """Renders markup through one rehydration session."""

    def __init__(
        self,
        config: Optional[SdomConfig] = None,
        runner: Optional[ScriptRunner] = None,
    ) -> None:
        self.config = config or load_config()
        self.runner = runner or PythonScriptRunner(script_types=self.config.python_script_types)
        get_container().configure(self.config)

    def render(self, markup: str, url: str = "about:blank") -> RenderResult:
        """Render markup and return the rehydrated page.

        Args:
            markup: Page source
            url: Address the page is served from

        Returns:
            RenderResult with the serialized markup and bootstrap plan
        """
        window = Window(location_href=url)
        session = sdom.init_hooks(window)
        try:
            parse_into(window.document, markup)
            executed, skipped = self._execute_scripts(window)

            plan = sdom.document_pre_serialize(window.document)
            output = window.document.serialize()
            sdom.document_post_serialize(window.document)
            stats = session.stats()
        finally:
            sdom.cleanup(window)

        logger.info(
            f"Rendered {url}: {executed} script(s) executed, {skipped} skipped, "
            f"{len(plan.entries)} element(s) rehydrated"
        )
        return RenderResult(
            markup=output,
            plan=plan,
            session_id=session.session_id,
            executed_scripts=executed,
            skipped_scripts=skipped,
            stats=stats,
        )

    def _execute_scripts(self, window: Window) -> Tuple[int, int]:
        executed = 0
        skipped = 0
        seen: List[Any] = []
        # Scripts may add or remove scripts; rescan until nothing new appears
        while True:
            pending = [
                script for script in window.document.get_elements_by_tag_name("script")
                if not any(script is done for done in seen)
            ]
            if not pending:
                break
            script = pending[0]
            seen.append(script)

            if not sdom.script_pre_execution(script):
                continue
            source = script.text_content
            if not self.config.execute_scripts:
                logger.debug("Server script execution disabled, not running script")
                skipped += 1
            elif not self.runner.can_run(script):
                logger.warning(
                    f"No runner for script type '{script.get_attribute('type') or ''}', "
                    "applying its context policy without running it"
                )
                skipped += 1
            else:
                self.runner.run(script, source, window)
                executed += 1
            sdom.script_post_execution(script, source)
        return executed, skipped
