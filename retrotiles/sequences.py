"""Frame sequences, colour cycles and loading them from .sqx files."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union

from .files import AssetLoader

MAX_NAME = 15

_HEX_RUN = re.compile(r"[0-9A-Fa-f]+")
_DEC_RUN = re.compile(r"[0-9]+")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class SequenceFrame:
    """One animation frame: a picture or tile index shown for ``delay`` ticks."""

    index: int
    delay: int


@dataclass
class ColorStrip:
    """A run of palette entries rotated every ``delay`` ticks.

    ``pos``, ``timer`` and ``t0`` hold the running state of an animation.
    """

    delay: int = 0
    first: int = 0
    count: int = 0
    dir: int = 0
    pos: int = field(default=0, compare=False)
    timer: int = field(default=0, compare=False)
    t0: int = field(default=0, compare=False)


@dataclass
class Sequence:
    """A named list of frames; ``target`` is the tile it replaces, if any."""

    name: str
    target: int = 0
    frames: list[SequenceFrame] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.frames)


@dataclass
class ColorCycle:
    """A named set of colour strips for palette animation."""

    name: str
    strips: list[ColorStrip] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.strips)


AnySequence = Union[Sequence, ColorCycle]


class SequencePack:
    """An ordered collection of sequences, looked up by name."""

    def __init__(self) -> None:
        self.sequences: list[AnySequence] = []

    def add(self, sequence: AnySequence) -> None:
        self.sequences.append(sequence)

    def find(self, name: str) -> AnySequence:
        """Return the first sequence with this name; raises :class:`KeyError`."""
        for sequence in self.sequences:
            if sequence.name == name:
                return sequence
        raise KeyError(name)

    def __iter__(self) -> Iterator[AnySequence]:
        return iter(self.sequences)

    def __len__(self) -> int:
        return len(self.sequences)


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _ishex(char: str) -> bool:
    return char in "0123456789ABCDEFabcdef"


def _parse_frames(text: str, delay: int) -> list[SequenceFrame]:
    """Read decimal and ``#``-prefixed hexadecimal frame indexes."""
    frames = []
    pos, end = 0, len(text)
    while pos < end:
        while pos < end and not _ishex(text[pos]) and text[pos] != "#":
            pos += 1
        if pos >= end:
            break
        if text[pos] == "#":
            pos += 1
            match = _HEX_RUN.match(text, pos)
            value = int(match.group(), 16) if match else None
        else:
            match = _DEC_RUN.match(text, pos)
            value = int(match.group()) if match else None
        if value is not None:
            frames.append(SequenceFrame(value, delay))
        while pos < end and _ishex(text[pos]):
            pos += 1
    return frames


@dataclass
class _State:
    pack: SequencePack
    name: str = ""
    target: int = 0
    delay: int = 0
    count: int = 0
    frames: list[SequenceFrame] = field(default_factory=list)
    strips: list[ColorStrip] = field(default_factory=list)


def _walk(element: ET.Element, state: _State) -> None:
    tag = element.tag.lower()
    strip = ColorStrip() if tag == "strip" else None
    if tag == "cycle":
        state.strips = []

    for raw_attr, value in element.attrib.items():
        attr = raw_attr.lower()
        if tag == "sequence":
            if attr == "name":
                state.name = value
            elif attr == "delay":
                state.delay = _atoi(value)
            elif attr in ("first", "target"):
                state.target = _atoi(value)
            elif attr == "count":
                state.count = _atoi(value)
        elif tag == "cycle":
            if attr == "name":
                state.name = value
        elif strip is not None:
            if attr == "delay":
                strip.delay = _atoi(value)
            elif attr == "first":
                strip.first = _atoi(value) & 0xFF
            elif attr == "count":
                strip.count = _atoi(value) & 0xFF
            elif attr == "dir":
                strip.dir = _atoi(value) & 0xFF
        state.name = state.name[:MAX_NAME]

    if strip is not None and strip.delay != 0:
        state.strips.append(strip)

    if tag == "sequence" and element.text:
        state.frames = _parse_frames(element.text, state.delay)
        state.count = len(state.frames)

    for child in element:
        _walk(child, state)

    if tag == "sequence":
        frames = [SequenceFrame(f.index, f.delay) for f in state.frames[: state.count]]
        frames += [SequenceFrame(0, 0) for _ in range(state.count - len(frames))]
        state.pack.add(Sequence(state.name, state.target, frames))
    elif tag == "cycle":
        state.pack.add(ColorCycle(state.name, list(state.strips)))


def parse_sequence_pack(text: Union[str, bytes]) -> SequencePack:
    """Parse the XML of an .sqx file; raises :class:`ValueError` if malformed."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ValueError(f"malformed sequence pack: {exc}") from exc
    state = _State(SequencePack())
    _walk(root, state)
    return state.pack


def load_sequence_pack(loader: AssetLoader, filename: str) -> SequencePack:
    """Load an .sqx file; raises :class:`FileNotFoundError` if missing."""
    if not loader.exists(filename):
        raise FileNotFoundError(filename)
    return parse_sequence_pack(loader.load(filename))