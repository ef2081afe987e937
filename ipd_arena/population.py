from typing import NamedTuple

from .agents import Agent


class AgentHandle(NamedTuple):
    """Stable reference to an arena slot. Stale once the slot's generation moves on."""
    index: int
    generation: int


class AgentArena:
    """Slot storage for live agents. Freed slots are reused with a bumped generation,
    so a handle to a dead agent resolves to None instead of to whoever took its slot."""

    def __init__(self):
        self.slots = []
        self.generations = []
        self.free = []

    def insert(self, agent):
        if self.free:
            index = self.free.pop()
        else:
            index = len(self.slots)
            self.slots.append(None)
            self.generations.append(0)
        self.slots[index] = agent
        return AgentHandle(index, self.generations[index])

    def remove(self, handle):
        if self.resolve(handle) is None:
            return
        self.slots[handle.index] = None
        self.generations[handle.index] += 1
        self.free.append(handle.index)

    def resolve(self, handle):
        if handle is None or handle.index >= len(self.slots):
            return None
        if self.generations[handle.index] != handle.generation:
            return None
        return self.slots[handle.index]


def agent_snapshot(agent, died, cause):
    return {
        'id': agent.id,
        'strategy': agent.strategy.value,
        'born': agent.born,
        'died': died,
        'cause': cause,
        'posx': agent.posx,
        'posy': agent.posy,
        'parent': agent.parent,
        'offspring': list(agent.offspring),
        'interactions': agent.interactions,
        'cooperations': agent.cooperations,
        'cooperation_rate': agent.cooperation_rate(),
        'score': agent.score,
        'resources': agent.resources,
    }


class Population:
    """Owns the live agents. All spawning, reproduction and removal goes through here.

    `agents` is kept in creation order, which is ascending id order; every phase of a
    tick iterates it in that order."""

    def __init__(self, config, rng):
        self.config = config
        self.rng = rng
        self.arena = AgentArena()
        self.agents = []
        self.next_id = 0
        self.generation_count = 0
        self.dead_agents = []

    def __len__(self):
        return len(self.agents)

    def __iter__(self):
        return iter(list(self.agents))

    def _clamp_x(self, x):
        r = self.config.creature_radius
        return min(max(x, r), self.config.world_width - r)

    def _clamp_y(self, y):
        r = self.config.creature_radius
        return min(max(y, r), self.config.world_height - r)

    def spawn(self, strategy, posx=None, posy=None, resources=None, now=0.0, parent=None):
        cfg = self.config
        if posx is None:
            posx = self.rng.uniform(cfg.creature_radius, cfg.world_width - cfg.creature_radius)
        if posy is None:
            posy = self.rng.uniform(cfg.creature_radius, cfg.world_height - cfg.creature_radius)
        agent = Agent(
            id=self.next_id,
            strategy=strategy,
            posx=self._clamp_x(posx),
            posy=self._clamp_y(posy),
            rng=self.rng,
            resources=cfg.initial_resources if resources is None else resources,
            velx=self.rng.uniform(-cfg.initial_speed, cfg.initial_speed),
            vely=self.rng.uniform(-cfg.initial_speed, cfg.initial_speed),
            born=now,
            parent=parent,
            error_rate_memory=cfg.error_rate_memory,
            memory_capacity=cfg.memory_capacity,
        )
        self.next_id += 1
        agent.handle = self.arena.insert(agent)
        self.agents.append(agent)
        return agent

    def seed(self, now=0.0):
        """Founders: initial_per_strategy agents for every enabled strategy, in catalogue order."""
        for strategy in self.config.enabled_strategies:
            for _ in range(self.config.initial_per_strategy):
                self.spawn(strategy, now=now)
        return len(self.agents)

    def reproduce(self, parent, now):
        """Asexual reproduction: the parent pays reproduction_cost, one offspring of the same
        strategy appears near it with baseline resources and no memories."""
        jitter = self.config.offspring_jitter
        parent.resources -= self.config.reproduction_cost
        child = self.spawn(
            parent.strategy,
            posx=parent.posx + self.rng.uniform(-jitter, jitter),
            posy=parent.posy + self.rng.uniform(-jitter, jitter),
            now=now,
            parent=parent.id,
        )
        parent.offspring.append(child.id)
        self.generation_count += 1
        return child

    def destroy(self, agent, now, cause):
        if not agent.alive:
            return
        agent.alive = False
        self.arena.remove(agent.handle)
        self.agents.remove(agent)
        self.dead_agents.append(agent_snapshot(agent, now, cause))

    def resolve(self, handle):
        return self.arena.resolve(handle)

    def excess(self, count=None):
        """Agents above carrying capacity, 0 when at or below it. count defaults to the live population."""
        count = len(self.agents) if count is None else count
        return max(0, count - self.config.carrying_capacity)

    def over_hard_limit(self, count=None):
        count = len(self.agents) if count is None else count
        return count > 2 * self.config.carrying_capacity

