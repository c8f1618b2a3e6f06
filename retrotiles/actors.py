"""A fixed pool of game actors with motion, hitboxes and timers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional

NUM_TIMERS = 4


@dataclass
class Rect:
    x1: int = 0
    y1: int = 0
    x2: int = 0
    y2: int = 0


@dataclass
class Actor:
    """One game object; ``state`` 0 means the slot is free."""

    index: int = 0
    kind: int = 0
    state: int = 0
    w: int = 0
    h: int = 0
    x: int = 0
    y: int = 0
    vx: int = 0
    vy: int = 0
    life: int = 0
    hitbox: Rect = field(default_factory=Rect)
    timers: list[int] = field(default_factory=lambda: [0] * NUM_TIMERS)
    callback: Optional[Callable[["Actor"], None]] = None
    usrdata: dict[str, Any] = field(default_factory=dict)

    def update_hitbox(self) -> None:
        self.hitbox = Rect(self.x, self.y, self.x + self.w, self.y + self.h)

    def collides(self, other: "Actor") -> bool:
        """Whether the hitboxes overlap; touching edges do not count."""
        a, b = self.hitbox, other.hitbox
        return a.x1 < b.x2 and a.x2 > b.x1 and a.y1 < b.y2 and a.y2 > b.y1


ActorHook = Optional[Callable[[Actor], None]]


class ActorPool:
    """A fixed number of actor slots updated once per frame.

    The optional hooks ``on_move``, ``on_disable`` and ``on_release`` let a
    renderer follow actors: they are called after an actor moved, when it
    went inactive during :meth:`tasks`, and when it is released.
    """

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError("count must not be negative")
        self.actors = [Actor() for _ in range(count)]
        self.time = 0
        self.on_move: ActorHook = None
        self.on_disable: ActorHook = None
        self.on_release: ActorHook = None

    def __len__(self) -> int:
        return len(self.actors)

    def available(self, first: int, length: int) -> Optional[int]:
        """Index of the first free slot in ``[first, first + length)``."""
        start = max(first, 0)
        end = min(first + length, len(self.actors))
        return next(
            (i for i in range(start, end) if self.actors[i].state == 0), None
        )

    def get(self, index: int) -> Actor:
        if not 0 <= index < len(self.actors):
            raise IndexError(f"actor {index} out of range")
        return self.actors[index]

    def set(
        self,
        index: int,
        kind: int,
        x: int,
        y: int,
        w: int,
        h: int,
        callback: Optional[Callable[[Actor], None]] = None,
    ) -> Actor:
        """Activate slot ``index`` with the given properties."""
        actor = self.get(index)
        actor.index = index
        actor.kind = kind
        actor.callback = callback
        actor.state = 1
        actor.x, actor.y, actor.w, actor.h = x, y, w, h
        actor.update_hitbox()
        return actor

    def release(self, actor: Actor) -> None:
        if self.on_release is not None:
            self.on_release(actor)
        actor.state = 0

    def tasks(self, time: int) -> None:
        """Move every active actor and run its callback."""
        self.time = time
        for actor in self.actors:
            if actor.state == 0:
                continue
            actor.x += actor.vx
            actor.y += actor.vy
            if actor.callback is not None:
                actor.callback(actor)
            if actor.state != 0:
                actor.update_hitbox()
                if self.on_move is not None:
                    self.on_move(actor)
            elif self.on_disable is not None:
                self.on_disable(actor)

    def set_timeout(self, actor: Actor, timer: int, timeout: int) -> None:
        actor.timers[timer] = (self.time + timeout) & 0xFFFFFFFF

    def timeout_elapsed(self, actor: Actor, timer: int) -> bool:
        return self.time >= actor.timers[timer]