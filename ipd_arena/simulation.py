"""Tick scheduler: economy -> movement -> interactions -> food -> stats, every frame, to completion."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import numpy as np

from .config import SimulationConfig
from .economy import AGED, STARVED, run_economy
from .food import FoodField
from .interactions import run_interactions
from .movement import run_movement
from .population import Population
from .rng import RandomSource
from .strategies import STRATEGY_ORDER, Strategy


@dataclass(frozen=True)
class AgentView:
    id: int
    strategy: Strategy
    posx: float
    posy: float
    resources: float
    age: float
    score: float
    interactions: int
    cooperations: int
    defections: int


@dataclass(frozen=True)
class FoodView:
    id: int
    posx: float
    posy: float
    value: float


@dataclass
class TickStats:
    tick: int
    time: float
    population: int
    births: int = 0
    deaths_starvation: int = 0
    deaths_age: int = 0
    encounters: int = 0
    food_eaten: int = 0
    food_available: int = 0
    generation_count: int = 0
    strategy_counts: Dict[Strategy, int] = field(default_factory=dict)
    avg_resources: float = 0.0
    avg_age: float = 0.0
    avg_score: float = 0.0
    cooperation_rate: float = 0.0

    @property
    def deaths(self):
        return self.deaths_starvation + self.deaths_age


@dataclass(frozen=True)
class Snapshot:
    """Read-only picture of the world after a tick, for renderers and stats aggregators."""
    tick: int
    time: float
    agents: Tuple[AgentView, ...]
    food: Tuple[FoodView, ...]
    stats: Optional[TickStats]


def collect_stats(tick, now, population, food, births, deaths, encounters, eaten):
    agents = population.agents
    counts = {strategy: 0 for strategy in STRATEGY_ORDER}
    for agent in agents:
        counts[agent.strategy] += 1
    stats = TickStats(
        tick=tick,
        time=now,
        population=len(agents),
        births=births,
        deaths_starvation=deaths[STARVED],
        deaths_age=deaths[AGED],
        encounters=encounters,
        food_eaten=eaten,
        food_available=len(food),
        generation_count=population.generation_count,
        strategy_counts=counts,
    )
    if agents:
        stats.avg_resources = float(np.mean([a.resources for a in agents]))
        stats.avg_age = float(np.mean([a.age for a in agents]))
        stats.avg_score = float(np.mean([a.score for a in agents]))
        actions = sum(a.interactions for a in agents)
        if actions:
            stats.cooperation_rate = sum(a.cooperations for a in agents) / actions
    return stats


class Simulation:
    """One run of the arena. Configuration is fixed for the run; reset() starts a fresh one."""

    def __init__(self, config=None, seed=None):
        self.config = config if config is not None else SimulationConfig()
        self.seed = seed
        self._start()

    def _start(self):
        self.rng = RandomSource(self.seed)
        self.population = Population(self.config, self.rng)
        self.food = FoodField(self.config, self.rng)
        self.tick_count = 0
        self.time = 0.0
        self.total_encounters = 0
        self.last_stats = None
        self.population.seed(now=self.time)

    def reset(self, config=None, seed=None):
        """Discards the whole run. A new config or seed applies from the fresh start."""
        if config is not None:
            self.config = config
        if seed is not None:
            self.seed = seed
        self._start()

    def tick(self, dt):
        """Advances the world by dt seconds (dt may vary between calls) and returns its TickStats."""
        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")
        self.time += dt
        now = self.time
        generations_before = self.population.generation_count

        deaths = run_economy(self.population, now, dt)
        run_movement(self.population, self.config, self.rng, self.food, dt)
        encounters = run_interactions(self.population.agents, now, self.config, self.rng)
        self.food.update(dt)
        eaten = self.food.consume(self.population.agents)

        self.tick_count += 1
        self.total_encounters += len(encounters)
        births = self.population.generation_count - generations_before
        self.last_stats = collect_stats(self.tick_count, now, self.population, self.food,
                                        births, deaths, len(encounters), eaten)
        return self.last_stats

    def run(self, steps, dt):
        return [self.tick(dt) for _ in range(steps)]

    def snapshot(self):
        agents = tuple(
            AgentView(a.id, a.strategy, a.posx, a.posy, a.resources, a.age, a.score,
                      a.interactions, a.cooperations, a.defections)
            for a in self.population.agents
        )
        food = tuple(FoodView(f.id, f.posx, f.posy, f.value) for f in self.food.items)
        return Snapshot(self.tick_count, self.time, agents, food, self.last_stats)

    @property
    def agents(self):
        return self.population.agents

    @property
    def extinct(self):
        return len(self.population) == 0
