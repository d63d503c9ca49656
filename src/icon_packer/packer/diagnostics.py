"""
Module: packer.diagnostics

Captures non-fatal packing issues (unusable sizes, slots already taken)
and summarizes them into a report that can be saved as JSON.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from icon_packer.core.models import Density, SlotType

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    UNUSABLE = "unusable"
    DUPLICATE_SLOT = "duplicate_slot"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PackDiagnostic:
    """
    A single skipped image.

    Fields:
    - source: Caller supplied name for the image (file path, index, ...)
    - width/height/density: What was classified
    - slot: Slot the image would have filled (DUPLICATE_SLOT only)
    """
    kind: DiagnosticKind
    source: str
    message: str
    width: int
    height: int
    density: Density
    slot: Optional[SlotType] = None

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "kind": self.kind.value,
            "source": self.source,
            "message": self.message,
            "size": [self.width, self.height],
            "density": int(self.density),
        }
        if self.slot is not None:
            d["slot"] = self.slot.value
        return d


def unusable(source: str, width: int, height: int, density: Density, reason: str) -> PackDiagnostic:
    """Diagnostic for an image whose size maps to no slot."""
    return PackDiagnostic(
        kind=DiagnosticKind.UNUSABLE,
        source=source,
        message=f"{source}: {width}x{height}{density} skipped, {reason}",
        width=width,
        height=height,
        density=density,
    )


def duplicate_slot(
    source: str,
    width: int,
    height: int,
    density: Density,
    slot: SlotType,
    holder: str,
) -> PackDiagnostic:
    """Diagnostic for an image whose slot was already filled."""
    return PackDiagnostic(
        kind=DiagnosticKind.DUPLICATE_SLOT,
        source=source,
        message=(
            f"{source}: {width}x{height}{density} skipped, slot {slot} ({slot.label}) "
            f"already filled by {holder}"
        ),
        width=width,
        height=height,
        density=density,
        slot=slot,
    )


@dataclass
class DiagnosticsReport:
    """Summary of all diagnostics from one packing pass."""
    generated_at: str
    total_issues: int
    summary_by_kind: Dict[str, int]
    diagnostics: List[PackDiagnostic]

    @classmethod
    def from_diagnostics(cls, diagnostics: List[PackDiagnostic]) -> "DiagnosticsReport":
        summary_by_kind: Dict[str, int] = {}
        for diagnostic in diagnostics:
            key = diagnostic.kind.value
            summary_by_kind[key] = summary_by_kind.get(key, 0) + 1

        return cls(
            generated_at=datetime.now(timezone.utc).isoformat(),
            total_issues=len(diagnostics),
            summary_by_kind=summary_by_kind,
            diagnostics=list(diagnostics),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "total_issues": self.total_issues,
            "summary_by_kind": self.summary_by_kind,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json())
        logger.info(f"Packing diagnostics saved: {path}")
