from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple
import json
import os

from .scene import BathtubSpec, InvalidBathtubSpec


class BathtubLoadError(ValueError):
    """Raised when a bathtub JSON record cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


# Accepted spellings per field, compared case-insensitively
_FIELD_ALIASES = {
    "name": ("name",),
    "width_cm": ("widthcm", "width_cm", "width"),
    "height_cm": ("heightcm", "height_cm", "height"),
    "corner_radius_percent": ("cornerradiuspercent", "corner_radius_percent", "cornerradius"),
}


def _lookup(record: dict, aliases: Tuple[str, ...]):
    lowered = {str(k).lower(): v for k, v in record.items()}
    for key in aliases:
        if key in lowered:
            return lowered[key]
    return None


def _as_float(path: str, field_name: str, value) -> float:
    if isinstance(value, bool) or value is None:
        raise BathtubLoadError(path, f"field '{field_name}' must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise BathtubLoadError(path, f"field '{field_name}' must be a number (got {value!r})") from None


def dict_to_bathtub(record: dict, path: str = "<record>") -> BathtubSpec:
    if not isinstance(record, dict):
        raise BathtubLoadError(path, "expected a JSON object")
    values = {}
    for field_name, aliases in _FIELD_ALIASES.items():
        raw = _lookup(record, aliases)
        if raw is None:
            if field_name == "name":
                values[field_name] = ""
                continue
            raise BathtubLoadError(path, f"missing field '{field_name}'")
        values[field_name] = str(raw) if field_name == "name" else _as_float(path, field_name, raw)
    spec = BathtubSpec(**values)
    try:
        return spec.validate()
    except InvalidBathtubSpec as e:
        raise BathtubLoadError(path, str(e)) from e


def load_bathtub(path: str) -> BathtubSpec:
    if not os.path.isfile(path):
        raise BathtubLoadError(path, "file not found")
    try:
        with open(path, "r", encoding="utf-8") as f:
            record = json.load(f)
    except json.JSONDecodeError as e:
        raise BathtubLoadError(path, f"invalid JSON ({e.msg} at line {e.lineno})") from e
    except OSError as e:
        raise BathtubLoadError(path, f"cannot read file ({e.strerror})") from e
    return dict_to_bathtub(record, path=path)


def source_label(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


@dataclass
class LoadResult:
    items: List[Tuple[str, BathtubSpec]] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def specs(self) -> List[BathtubSpec]:
        return [spec for _, spec in self.items]

    @property
    def labels(self) -> List[str]:
        return [source_label(p) for p, _ in self.items]


def load_bathtubs(paths: Iterable[str]) -> LoadResult:
    """
    Load every readable record, remembering (path, reason) for the ones skipped.
    """
    result = LoadResult()
    for p in paths:
        try:
            result.items.append((p, load_bathtub(p)))
        except BathtubLoadError as e:
            result.skipped.append((p, e.reason))
    return result
