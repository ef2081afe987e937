STARVED = "starvation"
AGED = "age"


def update_agent(agent, population, population_count, now, dt):
    """Per-agent resource bookkeeping for one tick, in a fixed order:
    age, age death, maintenance, density penalty, hard cutoff, starvation, reproduction.

    population_count is the head count at the start of the economy phase, so every agent of a
    tick pays the same density penalty. Returns the cause of death, or None if the agent lives."""
    cfg = population.config
    rng = population.rng

    agent.age += dt

    if cfg.death_rate_factor > 0 and rng.chance(cfg.death_rate_factor * agent.age * dt):
        population.destroy(agent, now, AGED)
        return AGED

    agent.resources -= cfg.maintenance_cost * dt
    excess = population.excess(population_count)
    if excess > 0:
        agent.resources -= density_penalty(excess, cfg.overpopulation_factor, dt)
    if cfg.hard_population_cutoff and population.over_hard_limit(population_count):
        agent.resources = 0.0

    if agent.resources <= cfg.minimum_resource:
        population.destroy(agent, now, STARVED)
        return STARVED

    if agent.resources >= cfg.reproduction_threshold:
        population.reproduce(agent, now)
    return None


def density_penalty(excess, overpopulation_factor, dt):
    """Extra drain for crowding, linear in the number of agents above carrying capacity."""
    return excess * overpopulation_factor * dt


def run_economy(population, now, dt):
    """Runs update_agent over the agents alive at the start of the phase, ascending id.
    Offspring born during the phase wait for the next tick. Returns {cause: deaths}."""
    deaths = {STARVED: 0, AGED: 0}
    count = len(population) #fixed for the phase, births earlier in the pass do not raise the drain for later agents
    for agent in population:
        cause = update_agent(agent, population, count, now, dt)
        if cause is not None:
            deaths[cause] += 1
    return deaths
