from __future__ import annotations

from pathlib import PurePath
from typing import Iterable, Iterator

from . import events as ev

IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "svg", "webp"}


def is_local_image(path: str) -> bool:
    return PurePath(path).suffix.lower().lstrip(".") in IMAGE_EXTENSIONS


def is_remote_url(url: str) -> bool:
    return url.startswith("http://") or url.startswith("https://")


def image_destinations(events: Iterable[ev.Event]) -> Iterator[str]:
    for event in events:
        if isinstance(event, ev.Start) and isinstance(event.kind, ev.Image):
            yield event.kind.dest
