import pytest

from ipd_arena.config import SimulationConfig
from ipd_arena.rng import RandomSource
from ipd_arena.simulation import Simulation


@pytest.fixture
def rng():
    return RandomSource(1234)


@pytest.fixture
def quiet_config():
    """No noise, no movement, no food, no upkeep: only what a test sets up explicitly happens."""
    return SimulationConfig(
        enabled_strategies=(),
        carrying_capacity=1000,
        error_rate_interaction=0.0,
        error_rate_memory=0.0,
        maintenance_cost=0.0,
        food_spawn_rate=0.0,
        speed_random=0.0,
        speed_food=0.0,
        speed_flee=0.0,
        speed_chase=0.0,
        max_speed=0.0,
        initial_speed=0.0,
        interaction_cooldown=1.0,
    )


@pytest.fixture
def empty_sim(quiet_config):
    return Simulation(quiet_config, seed=99)
