"""Hook registry with priority ordering and fault-isolated dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable
import warnings

from vibepack.plugins.base import HOOK_NAMES, HookContext

HookHandler = Callable[[Any, HookContext], None]


@dataclass(frozen=True, slots=True)
class HookRegistration:
    plugin_id: str
    hook_name: str
    handler: HookHandler
    priority: int = 0


@dataclass(frozen=True, slots=True)
class HookDiagnostic:
    plugin_id: str
    hook: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "plugin_id": self.plugin_id,
            "hook": self.hook,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(slots=True)
class HookRegistry:
    """Runs registered hook handlers and captures handler failures."""

    registrations: list[HookRegistration] = field(default_factory=list)
    diagnostics: list[HookDiagnostic] = field(default_factory=list)

    def register_hook(self, registration: HookRegistration) -> None:
        if registration.hook_name not in HOOK_NAMES:
            raise ValueError(f"Unsupported hook: {registration.hook_name}")
        self.registrations.append(registration)

    def unregister_hooks(self, plugin_id: str) -> int:
        kept = [item for item in self.registrations if item.plugin_id != plugin_id]
        removed = len(self.registrations) - len(kept)
        self.registrations[:] = kept
        return removed

    def hooks_for(self, hook_name: str) -> list[HookRegistration]:
        matching = [item for item in self.registrations if item.hook_name == hook_name]
        return sorted(matching, key=lambda item: item.priority, reverse=True)

    def clear_diagnostics(self) -> None:
        self.diagnostics.clear()

    def run_hook(self, hook_name: str, event: Any, ctx: HookContext) -> None:
        for registration in self.hooks_for(hook_name):
            try:
                registration.handler(event, ctx)
            except Exception as error:
                diagnostic = HookDiagnostic(
                    plugin_id=registration.plugin_id,
                    hook=hook_name,
                    error_type=error.__class__.__name__,
                    message=str(error),
                )
                self.diagnostics.append(diagnostic)
                warnings.warn(
                    (
                        f"vibekit plugin failure: plugin={diagnostic.plugin_id} "
                        f"hook={diagnostic.hook} "
                        f"error={diagnostic.error_type}: {diagnostic.message}"
                    ),
                    RuntimeWarning,
                    stacklevel=2,
                )
