from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

from puzzle_room.engine.tools import ToolDescriptor, ToolRegistry

logger = logging.getLogger(__name__)


NOISE_ACTIONS: tuple[str, ...] = ("polish", "kick", "yell_at", "caress", "lick", "blow_on", "admire", "poke")
NOISE_OBJECTS: tuple[str, ...] = ("brass", "wood", "stone", "dust", "hinge", "floor", "ceiling", "darkness")

NOISE_DESCRIPTION = "A generic interaction."
NOISE_MESSAGE = "Nothing happens."


@dataclass(frozen=True, slots=True)
class NoiseToolGenerator:
    """Synthesizes decoy tools named `namespace_action_object`.

    Namespaces are the lock ids, so decoys sit right next to the real tools in
    a sorted catalog and look just as plausible.
    """

    namespaces: tuple[str, ...]
    actions: tuple[str, ...] = NOISE_ACTIONS
    objects: tuple[str, ...] = NOISE_OBJECTS

    def candidate_name(self, rng: random.Random) -> str:
        ns = rng.choice(self.namespaces)
        act = rng.choice(self.actions)
        obj = rng.choice(self.objects)
        return f"{ns}_{act}_{obj}"

    def populate(self, registry: ToolRegistry, *, rng: random.Random, count: int) -> list[str]:
        """Make `count` draws and register every candidate not already taken.

        Collisions (with functional tools or earlier decoys) are dropped, so the
        number of decoys added may be less than `count`.
        """

        if not self.namespaces:
            return []

        added: list[str] = []
        for _ in range(count):
            name = self.candidate_name(rng)
            if name in registry:
                continue
            registry.register(ToolDescriptor.noise(name, NOISE_DESCRIPTION, NOISE_MESSAGE))
            added.append(name)

        logger.debug("Registered %d decoy tools from %d draws", len(added), count)
        return added


def generator_for_locks(lock_ids: Sequence[str]) -> NoiseToolGenerator:
    return NoiseToolGenerator(namespaces=tuple(lock_ids))
