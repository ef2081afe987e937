import math

import numpy as np


def unit(dx, dy):
    """Unit vector along (dx, dy); the zero vector when there is no direction to speak of."""
    length = math.hypot(dx, dy)
    if length < 1e-9 or not math.isfinite(length):
        return 0.0, 0.0
    return dx / length, dy / length


def wander_force(agent, config, rng):
    if config.speed_random == 0:
        return 0.0, 0.0
    ux, uy = rng.unit_vector()
    return ux * config.speed_random, uy * config.speed_random


def food_force(agent, config, food):
    if config.speed_food == 0 or food is None:
        return 0.0, 0.0
    #well fed agents don't bother
    if agent.resources > config.reproduction_threshold * config.food_seek_fraction:
        return 0.0, 0.0
    target = food.nearest(agent.posx, agent.posy, config.food_sense_range)
    if target is None:
        return 0.0, 0.0
    ux, uy = unit(target.posx - agent.posx, target.posy - agent.posy)
    return ux * config.speed_food, uy * config.speed_food


def flee_force(agent, config):
    if agent.last_harmer is None:
        return 0.0, 0.0
    hx, hy = agent.last_harmer
    if agent.distance_to(hx, hy) > config.flee_clear_distance:
        agent.last_harmer = None
        return 0.0, 0.0
    ux, uy = unit(agent.posx - hx, agent.posy - hy)
    return ux * config.speed_flee, uy * config.speed_flee


def chase_force(agent, config, population):
    if agent.last_victim is None:
        return 0.0, 0.0
    victim = population.resolve(agent.last_victim)
    if victim is None:
        agent.last_victim = None
        return 0.0, 0.0
    ux, uy = unit(victim.posx - agent.posx, victim.posy - agent.posy)
    return ux * config.speed_chase, uy * config.speed_chase


def desired_velocity(agent, config, rng, population, food):
    forces = (
        wander_force(agent, config, rng),
        food_force(agent, config, food),
        flee_force(agent, config),
        chase_force(agent, config, population),
    )
    return sum(f[0] for f in forces), sum(f[1] for f in forces)


def blend_factor(dt, time_constant):
    """Share of the gap to the desired velocity closed in dt seconds. Exponential in dt, so two
    half-length frames blend exactly like one full frame."""
    if time_constant <= 0:
        return 1.0
    return 1.0 - math.exp(-dt / time_constant)


def move_agent(agent, config, rng, population, food, dt):
    dvx, dvy = desired_velocity(agent, config, rng, population, food)
    k = blend_factor(dt, config.velocity_time_constant)
    vx = agent.velx + (dvx - agent.velx) * k
    vy = agent.vely + (dvy - agent.vely) * k

    speed = math.hypot(vx, vy)
    if speed > config.max_speed:
        vx = vx / speed * config.max_speed
        vy = vy / speed * config.max_speed

    x = agent.posx + vx * dt
    y = agent.posy + vy * dt

    #elastic reflection off the walls, the creature's rim stays inside the world
    r = config.creature_radius
    if x < r or x > config.world_width - r:
        vx = -vx
        x = float(np.clip(x, r, config.world_width - r))
    if y < r or y > config.world_height - r:
        vy = -vy
        y = float(np.clip(y, r, config.world_height - r))

    agent.velx, agent.vely = vx, vy
    agent.posx, agent.posy = x, y


def run_movement(population, config, rng, food, dt):
    for agent in population:
        move_agent(agent, config, rng, population, food, dt)
