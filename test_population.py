from ipd_arena.population import AgentArena, Population
from ipd_arena.strategies import Strategy


def test_arena_handles_go_stale_after_removal():
    arena = AgentArena()
    first = arena.insert("a")
    arena.remove(first)
    second = arena.insert("b")
    assert second.index == first.index
    assert second.generation == first.generation + 1
    assert arena.resolve(first) is None
    assert arena.resolve(second) == "b"
    assert arena.resolve(None) is None
    #removing through a stale handle leaves the new occupant alone
    arena.remove(first)
    assert arena.resolve(second) == "b"


def test_seeding_follows_catalogue_order(quiet_config, rng):
    config = quiet_config.with_changes(
        enabled_strategies=("tit-for-tat", "always defect"), initial_per_strategy=3)
    pop = Population(config, rng)
    assert pop.seed() == 6
    assert [a.id for a in pop.agents] == list(range(6))
    assert [a.strategy for a in pop.agents] == [Strategy.ALWAYS_DEFECT] * 3 + [Strategy.TIT_FOR_TAT] * 3
    r = config.creature_radius
    for agent in pop.agents:
        assert r <= agent.posx <= config.world_width - r
        assert r <= agent.posy <= config.world_height - r


def test_offspring_is_clamped_to_the_world(quiet_config, rng):
    pop = Population(quiet_config, rng)
    r = quiet_config.creature_radius
    parent = pop.spawn(Strategy.GRIM_TRIGGER, 0, 0, resources=500)
    assert (parent.posx, parent.posy) == (r, r)
    for _ in range(20):
        child = pop.reproduce(parent, now=1.0)
        assert child.posx >= r and child.posy >= r
    assert pop.generation_count == 20


def test_ids_are_never_reused(quiet_config, rng):
    pop = Population(quiet_config, rng)
    a = pop.spawn(Strategy.RANDOM, 100, 100)
    pop.destroy(a, now=1.0, cause="starvation")
    b = pop.spawn(Strategy.RANDOM, 100, 100)
    assert b.id == a.id + 1
    assert pop.resolve(a.handle) is None
    assert pop.resolve(b.handle) is b
    #destroying twice is harmless
    pop.destroy(a, now=2.0, cause="starvation")
    assert len(pop.dead_agents) == 1


def test_capacity_checks(quiet_config, rng):
    config = quiet_config.with_changes(carrying_capacity=2)
    pop = Population(config, rng)
    for _ in range(3):
        pop.spawn(Strategy.RANDOM)
    assert pop.excess() == 1
    assert pop.excess(1) == 0
    assert not pop.over_hard_limit()
    assert pop.over_hard_limit(5)
