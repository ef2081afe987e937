import numpy as np

from .strategies import COOPERATE, Strategy, act

# payoff matrix keyed by (own action, other's action), 1 for cooperate, -1 for defect
# the sucker's payoff and mutual defection are losses: encounters are a resource economy, not just a score
PAYOFFS = {(1, 1): 3, (1, -1): -2, (-1, 1): 5, (-1, -1): -1}


def payoffs_for(action_a, action_b, scale=1.0):
    return PAYOFFS[(action_a, action_b)] * scale, PAYOFFS[(action_b, action_a)] * scale


def pairwise_distances(agents):
    """Euclidean distance matrix for the agents' current positions."""
    if not agents:
        return np.zeros((0, 0))
    pos = np.array([(a.posx, a.posy) for a in agents], dtype=float)
    delta = pos[:, None, :] - pos[None, :, :]
    return np.hypot(delta[..., 0], delta[..., 1])


def play_round(A, B, now, config, rng):
    """One round of the prisoner's dilemma between A and B. Both decide against what they remember
    of each other, payoffs go straight into resources, and each remembers the other's move
    (with memory noise). Returns (action_A, action_B, payoff_A, payoff_B)."""
    action_A = act(A.strategy, A.memory.get(B.id), A.strategy_state, rng, config.error_rate_interaction)
    action_B = act(B.strategy, B.memory.get(A.id), B.strategy_state, rng, config.error_rate_interaction)

    payoff_A, payoff_B = payoffs_for(action_A, action_B, config.payoff_scale)

    for agent, action, payoff in ((A, action_A, payoff_A), (B, action_B, payoff_B)):
        agent.resources += payoff
        agent.score += payoff
        agent.interactions += 1
        if action == COOPERATE:
            agent.cooperations += 1
        else:
            agent.defections += 1

    A.memory.record(B.id, action_B)
    B.memory.record(A.id, action_A)

    if A.strategy == Strategy.WIN_STAY_LOSE_SHIFT:
        A.strategy_state.last_action = action_A
        A.strategy_state.last_payoff = payoff_A
    if B.strategy == Strategy.WIN_STAY_LOSE_SHIFT:
        B.strategy_state.last_action = action_B
        B.strategy_state.last_payoff = payoff_B

    A.last_interaction_time = now
    B.last_interaction_time = now
    A.last_partner = B.id
    B.last_partner = A.id

    #whoever got hurt remembers where the culprit stood, the culprit remembers its victim
    if payoff_A < 0:
        A.last_harmer = (B.posx, B.posy)
        B.last_victim = A.handle
    if payoff_B < 0:
        B.last_harmer = (A.posx, A.posy)
        A.last_victim = B.handle

    return action_A, action_B, payoff_A, payoff_B


def run_interactions(agents, now, config, rng):
    """Scans every unordered pair once, in ascending (i, j) order, and plays a round for each pair
    in range whose members are both off cooldown. The cooldown check sees stamps from earlier
    pairs of the same scan, so an agent plays at most once per cooldown window.
    Returns the list of (A, B, action_A, action_B) encounters in the order they were played."""
    encounters = []
    distance = pairwise_distances(agents)
    cooldown = config.cooldown
    n = len(agents)
    for i in range(n):
        A = agents[i]
        for j in range(i + 1, n):
            if A.cooling_down(now, cooldown):
                break
            B = agents[j]
            if B.cooling_down(now, cooldown):
                continue
            if distance[i, j] < config.interaction_distance:
                action_A, action_B, _, _ = play_round(A, B, now, config, rng)
                encounters.append((A, B, action_A, action_B))
    return encounters
