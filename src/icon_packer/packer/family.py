"""
Module: packer.family

Purpose:
    The IconFamily container: at most one encoded payload per slot,
    filled by insert-if-absent only.

Key Classes:
    - IconFamily: Mapping of SlotType -> encoded payload
    - PackError: Base class for hard packing errors
    - EmptyFamilyError, FamilyFinalizedError, IconWriteError

Used By:
    - packer.builder: Populates a family
    - packer.codec: Serializes a family
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterator, Optional, Tuple

from icon_packer.core.models import SlotType, slot_order

if TYPE_CHECKING:
    from .diagnostics import PackDiagnostic


class PackError(Exception):
    """Hard error that aborts a packing pass."""
    pass


class EmptyFamilyError(PackError):
    """No slot was populated, so there is nothing to serialize."""

    def __init__(
        self,
        message: str = "No usable icon images: the icon family is empty",
        diagnostics: Tuple["PackDiagnostic", ...] = (),
    ):
        super().__init__(message)
        self.diagnostics = diagnostics


class FamilyFinalizedError(PackError):
    """The family was already serialized; it accepts no further changes."""
    pass


class IconWriteError(PackError):
    """Writing the serialized container failed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class IconFamily:
    """
    Set of populated slots destined for one container.

    Keys are unique; a slot is only ever written once. Iteration follows
    the slot table order regardless of insertion order, so serializing
    the same set of payloads always yields the same bytes.

    Example:
        >>> family = IconFamily()
        >>> family.add_if_absent(SlotType.IC09, b"...png...")
        True
        >>> family.add_if_absent(SlotType.IC09, b"other")
        False
    """

    def __init__(self) -> None:
        self._payloads: Dict[SlotType, bytes] = {}
        self._sources: Dict[SlotType, str] = {}

    def has_slot(self, slot: SlotType) -> bool:
        return slot in self._payloads

    def add_if_absent(self, slot: SlotType, payload: bytes, source: str = "") -> bool:
        """
        Store payload for slot unless the slot is already filled.

        Returns:
            True if stored, False if the slot was taken.
        """
        if slot in self._payloads:
            return False
        self._payloads[slot] = bytes(payload)
        self._sources[slot] = source
        return True

    def payload(self, slot: SlotType) -> bytes:
        """Raises KeyError if slot is empty."""
        return self._payloads[slot]

    def source_of(self, slot: SlotType) -> str:
        """Name of the image that filled slot ('' if unnamed)."""
        return self._sources[slot]

    def slots(self) -> Tuple[SlotType, ...]:
        """Populated slots in serialization order."""
        return tuple(sorted(self._payloads, key=slot_order))

    def items(self) -> Iterator[Tuple[SlotType, bytes]]:
        for slot in self.slots():
            yield slot, self._payloads[slot]

    def is_empty(self) -> bool:
        return not self._payloads

    def __len__(self) -> int:
        return len(self._payloads)

    def __contains__(self, slot: object) -> bool:
        return slot in self._payloads

    def __repr__(self) -> str:
        return f"IconFamily({', '.join(s.value for s in self.slots())})"
