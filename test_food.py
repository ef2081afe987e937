import pytest

from ipd_arena.food import FoodField
from ipd_arena.population import Population
from ipd_arena.strategies import Strategy


def test_spawn_rate_accumulates_under_variable_dt(quiet_config, rng):
    food = FoodField(quiet_config.with_changes(food_spawn_rate=1.0), rng)
    for dt in (0.25, 0.25, 0.25):
        food.update(dt)
    assert len(food) == 0
    food.update(0.25)
    assert len(food) == 1
    food.update(2.0)
    assert len(food) == 3


def test_spawned_food_respects_margin(quiet_config, rng):
    config = quiet_config.with_changes(food_spawn_rate=50.0)
    food = FoodField(config, rng)
    food.update(1.0)
    assert len(food) == 50
    for item in food.items:
        assert config.food_margin <= item.posx <= config.world_width - config.food_margin
        assert config.food_margin <= item.posy <= config.world_height - config.food_margin
        assert item.value == config.food_value


def test_food_expires(quiet_config, rng):
    food = FoodField(quiet_config.with_changes(food_ttl=2.0), rng)
    food.spawn(100, 100)
    food.update(1.0)
    assert len(food) == 1
    food.update(1.0)
    assert len(food) == 0
    assert food.expired == 1


def test_first_agent_in_reach_eats(quiet_config, rng):
    pop = Population(quiet_config, rng)
    food = FoodField(quiet_config, rng)
    first = pop.spawn(Strategy.ALWAYS_COOPERATE, 100, 100)
    second = pop.spawn(Strategy.ALWAYS_DEFECT, 105, 100)
    far = pop.spawn(Strategy.ALWAYS_DEFECT, 600, 600)
    food.spawn(102, 100)
    assert food.consume(pop.agents) == 1
    assert first.resources == pytest.approx(100 + quiet_config.food_value)
    assert second.resources == 100 and far.resources == 100
    assert len(food) == 0


def test_food_beyond_reach_stays(quiet_config, rng):
    pop = Population(quiet_config, rng)
    food = FoodField(quiet_config, rng)
    pop.spawn(Strategy.ALWAYS_COOPERATE, 100, 100)
    reach = quiet_config.creature_radius + quiet_config.pickup_radius
    food.spawn(100 + reach, 100)
    assert food.consume(pop.agents) == 0
    assert len(food) == 1


def test_each_item_feeds_one_agent(quiet_config, rng):
    pop = Population(quiet_config, rng)
    food = FoodField(quiet_config, rng)
    agent = pop.spawn(Strategy.ALWAYS_COOPERATE, 100, 100)
    food.spawn(100, 100)
    food.spawn(101, 100)
    assert food.consume(pop.agents) == 2
    assert agent.resources == pytest.approx(100 + 2 * quiet_config.food_value)


def test_nearest(quiet_config, rng):
    food = FoodField(quiet_config, rng)
    near = food.spawn(110, 100)
    food.spawn(150, 100)
    assert food.nearest(100, 100, 200) is near
    assert food.nearest(100, 100, 5) is None
