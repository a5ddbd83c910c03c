"""Event definitions and their topics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from Crypto.Hash import keccak

from .abi import abi_selector_name
from .types import FixedSize


def keccak_hex(data: bytes) -> str:
    """The Keccak-256 digest of ``data`` as lowercase hex without a prefix."""
    digest = keccak.new(digest_bits=256)
    digest.update(data)
    return digest.hexdigest()


def _build_event_topic(name: str, abi_fields: list[str]) -> str:
    signature = f"{name}({','.join(abi_fields)})"
    return keccak_hex(signature.encode())


@dataclass(frozen=True)
class EventDef:
    """An event: its name, topic, fields and which fields are indexed."""

    name: str
    fields: tuple
    indexed_fields: tuple = ()
    topic: str = field(init=False)

    def __post_init__(self) -> None:
        fields = tuple((name, typ) for name, typ in self.fields)
        object.__setattr__(self, "fields", fields)
        object.__setattr__(self, "indexed_fields", tuple(self.indexed_fields))
        topic = _build_event_topic(
            self.name, [abi_selector_name(typ) for _, typ in fields]
        )
        object.__setattr__(self, "topic", topic)

    def indexed_field_types_with_index(self) -> list[tuple[int, FixedSize]]:
        """The indexed fields, which are logged as additional topics."""
        return [(index, self.fields[index][1]) for index in self.indexed_fields]

    def non_indexed_field_types_with_index(self) -> list[tuple[int, FixedSize]]:
        """The non-indexed fields, which are logged in the data section."""
        return [
            (index, typ)
            for index, (_, typ) in enumerate(self.fields)
            if index not in self.indexed_fields
        ]

    def non_indexed_field_types(self) -> list[FixedSize]:
        return [typ for _, typ in self.non_indexed_field_types_with_index()]

    def iter_field_types(self) -> Iterator[FixedSize]:
        return (typ for _, typ in self.fields)

    def has_field(self, field_name: str) -> bool:
        return any(name == field_name for name, _ in self.fields)