import math

from .memory import MemoryStore
from .strategies import WSLS_INITIAL_ACTION, WSLS_INITIAL_PAYOFF, Strategy


class StrategyState:
    """Own outcome of the agent's most recent round against anybody. Only win-stay-lose-shift reads it."""

    def __init__(self, last_action=WSLS_INITIAL_ACTION, last_payoff=WSLS_INITIAL_PAYOFF):
        self.last_action = last_action
        self.last_payoff = last_payoff


class Agent:
    def __init__(self, id, strategy, posx, posy, rng, resources=100.0, velx=0.0, vely=0.0, born=0.0,
                 parent=None, error_rate_memory=0.0, memory_capacity=10):
        self.id = id
        self.strategy = Strategy(strategy)
        self.posx = posx
        self.posy = posy
        self.velx = velx
        self.vely = vely
        self.resources = resources
        self.age = 0.0 #seconds
        self.born = born #simulation time of birth
        self.parent = parent
        self.offspring = []
        self.score = 0.0
        self.interactions = 0
        self.cooperations = 0
        self.defections = 0
        self.last_interaction_time = -math.inf #never interacted, no cooldown
        self.last_partner = None
        self.memory = MemoryStore(rng, error_rate=error_rate_memory, capacity=memory_capacity)
        self.strategy_state = StrategyState()
        self.last_harmer = None #(x, y) where the last agent that hurt us stood
        self.last_victim = None #AgentHandle of the last agent we hurt
        self.handle = None #set by the population arena
        self.alive = True

    def cooling_down(self, now, cooldown):
        return now - self.last_interaction_time < cooldown

    def distance_to(self, x, y):
        return math.hypot(x - self.posx, y - self.posy)

    def cooperation_rate(self):
        if self.interactions == 0:
            return 0.0
        return self.cooperations / self.interactions

    def __repr__(self):
        return (f"Agent(id={self.id}, strategy={self.strategy.value!r}, pos=({self.posx:.1f}, {self.posy:.1f}), "
                f"resources={self.resources:.1f})")
