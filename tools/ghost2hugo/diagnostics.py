from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    message: str
    post_id: Any = None

    def __str__(self) -> str:
        if self.post_id is None:
            return f"{self.kind}: {self.message}"
        return f"{self.kind}: {self.message} (post {self.post_id})"


class Diagnostics:
    """
    Collects non-fatal conversion problems. Renderers and the classifier
    report here instead of raising.
    """

    def __init__(self, echo: bool = False) -> None:
        self.echo = echo
        self._records: List[Diagnostic] = []
        self._lock = threading.Lock()

    def report(self, kind: str, message: str, post_id: Any = None) -> Diagnostic:
        d = Diagnostic(kind, message, post_id)
        with self._lock:
            self._records.append(d)
        if self.echo:
            print(f"! {d}")
        return d

    @property
    def records(self) -> List[Diagnostic]:
        with self._lock:
            return list(self._records)

    def of_kind(self, kind: str) -> List[Diagnostic]:
        return [d for d in self.records if d.kind == kind]

    def for_post(self, post_id: Optional[Any]) -> "PostDiagnostics":
        return PostDiagnostics(self, post_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class PostDiagnostics:
    """Diagnostics view that stamps every report with one post id."""

    def __init__(self, parent: Diagnostics, post_id: Any) -> None:
        self.parent = parent
        self.post_id = post_id

    def report(self, kind: str, message: str, post_id: Any = None) -> Diagnostic:
        return self.parent.report(
            kind, message, self.post_id if post_id is None else post_id
        )
