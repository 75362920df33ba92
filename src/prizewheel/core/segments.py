"""Segment list helpers: ids, shuffling and loading from files."""

from pathlib import Path
from typing import Any, List, Optional, Sequence, TypeVar
import logging
import random
import string
import time

import yaml

from prizewheel.core.state import SegmentEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def make_uid(rng: Optional[random.Random] = None) -> str:
    """Short unique id: random base36 part, dash, millisecond time in base36."""
    rand = (rng or random).getrandbits(52)
    return f"{_to_base36(rand)}-{_to_base36(int(time.time() * 1000))}"


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Shuffled copy (Fisher-Yates); the input is left untouched."""
    result = list(items)
    rand = rng or random
    for i in range(len(result) - 1, 0, -1):
        j = rand.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def to_entry(item: Any) -> SegmentEntry:
    """Build a SegmentEntry from a string or a mapping with ``text``.

    Raises:
        ValueError: If the item has no usable text
    """
    if isinstance(item, SegmentEntry):
        return item
    if isinstance(item, str):
        return SegmentEntry(text=item.strip(), id=make_uid())
    if isinstance(item, dict) and "text" in item:
        extra = {k: v for k, v in item.items() if k not in ("text", "id")}
        return SegmentEntry(text=str(item["text"]).strip(), id=str(item.get("id") or make_uid()), data=extra)
    raise ValueError(f"Segment entry needs text: {item!r}")


def load_segments(path: Path | str) -> List[SegmentEntry]:
    """
    Load wheel entries from a YAML or JSON file.

    The file holds either a list of entries or a mapping with a
    ``segments`` (or ``questions``) list. Entries are strings or mappings
    with a ``text`` key.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content has the wrong shape
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Cannot parse {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("segments", data.get("questions"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of segments")

    entries = [to_entry(item) for item in data]
    logger.info(f"Loaded {len(entries)} segments from {path}")
    return entries
