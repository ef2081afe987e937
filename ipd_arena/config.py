from dataclasses import dataclass, replace

from .memory import MEMORY_CAPACITY
from .strategies import DEFAULT_ENABLED, STRATEGY_ORDER, parse_strategy

#world (pixels, seconds)
DEFAULT_WORLD_WIDTH = 1200.0
DEFAULT_WORLD_HEIGHT = 800.0
DEFAULT_CREATURE_RADIUS = 20.0
DEFAULT_INITIAL_PER_STRATEGY = 10
DEFAULT_INITIAL_RESOURCES = 100.0 #founders and offspring alike start with this

#the game
DEFAULT_INTERACTION_DISTANCE = 200.0
DEFAULT_INTERACTION_SPEED = 960 #high = fast, converts to a cooldown of (1010 - speed) ms
REFERENCE_INTERACTION_SPEED = 960 #payoffs are scaled by REFERENCE/speed when a speed is configured
DEFAULT_INTERACTION_COOLDOWN = (1010 - DEFAULT_INTERACTION_SPEED) / 1000.0 #seconds, used when neither a cooldown nor a speed is given
DEFAULT_ERROR_RATE_INTERACTION = 0.05 #chance of playing the opposite of the intended action
DEFAULT_ERROR_RATE_MEMORY = 0.05 #chance of remembering the opposite of the observed action

#energy ecology
DEFAULT_REPRODUCTION_THRESHOLD = 200.0
DEFAULT_REPRODUCTION_COST = 100.0
DEFAULT_MINIMUM_RESOURCE = 10.0 #death threshold
DEFAULT_MAINTENANCE_COST = 5.0 #per second
DEFAULT_CARRYING_CAPACITY = 0 #0: derive from initial population, see SimulationConfig.__post_init__
CARRYING_CAPACITY_MULTIPLIER = 2
DEFAULT_OVERPOPULATION_FACTOR = 10.0 #per excess agent per second
DEFAULT_HARD_POPULATION_CUTOFF = False #starve everyone beyond twice the carrying capacity
DEFAULT_DEATH_RATE_FACTOR = 0.0 #age death chance per second is factor*age, 0 for immortality
DEFAULT_OFFSPRING_JITTER = 30.0

#food
DEFAULT_FOOD_SPAWN_RATE = 1.0 #items per second
DEFAULT_FOOD_VALUE = 60.0
DEFAULT_FOOD_TTL = 15.0
DEFAULT_FOOD_MARGIN = 20.0
DEFAULT_PICKUP_RADIUS = 15.0
DEFAULT_FOOD_SENSE_RANGE = 200.0
DEFAULT_FOOD_SEEK_FRACTION = 0.7 #only agents below this fraction of the reproduction threshold look for food

#movement force weights (pixels per second), 0 disables a force
DEFAULT_SPEED_RANDOM = 5.0
DEFAULT_SPEED_FOOD = 50.0
DEFAULT_SPEED_FLEE = 60.0
DEFAULT_SPEED_CHASE = 10.0
DEFAULT_MAX_SPEED = 120.0
DEFAULT_INITIAL_SPEED = 100.0
DEFAULT_VELOCITY_TIME_CONSTANT = 0.5 #seconds for the velocity to close ~63% of the gap to the desired velocity
DEFAULT_FLEE_CLEAR_DISTANCE = 250.0


def cooldown_from_speed(speed):
    return max(0.0, (1010 - speed) / 1000.0)


@dataclass(frozen=True)
class SimulationConfig:
    world_width: float = DEFAULT_WORLD_WIDTH
    world_height: float = DEFAULT_WORLD_HEIGHT
    creature_radius: float = DEFAULT_CREATURE_RADIUS
    initial_per_strategy: int = DEFAULT_INITIAL_PER_STRATEGY
    initial_resources: float = DEFAULT_INITIAL_RESOURCES
    enabled_strategies: tuple = DEFAULT_ENABLED

    interaction_distance: float = DEFAULT_INTERACTION_DISTANCE
    interaction_cooldown: float = None #None: derive from interaction_speed, see cooldown
    interaction_speed: float = None
    error_rate_interaction: float = DEFAULT_ERROR_RATE_INTERACTION
    error_rate_memory: float = DEFAULT_ERROR_RATE_MEMORY
    memory_capacity: int = MEMORY_CAPACITY

    reproduction_threshold: float = DEFAULT_REPRODUCTION_THRESHOLD
    reproduction_cost: float = DEFAULT_REPRODUCTION_COST
    minimum_resource: float = DEFAULT_MINIMUM_RESOURCE
    maintenance_cost: float = DEFAULT_MAINTENANCE_COST
    carrying_capacity: int = DEFAULT_CARRYING_CAPACITY
    overpopulation_factor: float = DEFAULT_OVERPOPULATION_FACTOR
    hard_population_cutoff: bool = DEFAULT_HARD_POPULATION_CUTOFF
    death_rate_factor: float = DEFAULT_DEATH_RATE_FACTOR
    offspring_jitter: float = DEFAULT_OFFSPRING_JITTER

    food_spawn_rate: float = DEFAULT_FOOD_SPAWN_RATE
    food_value: float = DEFAULT_FOOD_VALUE
    food_ttl: float = DEFAULT_FOOD_TTL
    food_margin: float = DEFAULT_FOOD_MARGIN
    pickup_radius: float = DEFAULT_PICKUP_RADIUS
    food_sense_range: float = DEFAULT_FOOD_SENSE_RANGE
    food_seek_fraction: float = DEFAULT_FOOD_SEEK_FRACTION

    speed_random: float = DEFAULT_SPEED_RANDOM
    speed_food: float = DEFAULT_SPEED_FOOD
    speed_flee: float = DEFAULT_SPEED_FLEE
    speed_chase: float = DEFAULT_SPEED_CHASE
    max_speed: float = DEFAULT_MAX_SPEED
    initial_speed: float = DEFAULT_INITIAL_SPEED
    velocity_time_constant: float = DEFAULT_VELOCITY_TIME_CONSTANT
    flee_clear_distance: float = DEFAULT_FLEE_CLEAR_DISTANCE

    def __post_init__(self):
        enabled = tuple(parse_strategy(s) for s in self.enabled_strategies)
        #keep catalogue order and drop duplicates, seeding order depends on it
        enabled = tuple(s for s in STRATEGY_ORDER if s in enabled)
        object.__setattr__(self, "enabled_strategies", enabled)
        for name in ("error_rate_interaction", "error_rate_memory"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.memory_capacity < 1:
            raise ValueError(f"memory_capacity must be at least 1, got {self.memory_capacity}")
        if self.interaction_speed is not None and self.interaction_speed <= 0:
            raise ValueError(f"interaction_speed must be positive, got {self.interaction_speed}")
        if self.carrying_capacity <= 0:
            derived = self.initial_per_strategy * len(enabled) * CARRYING_CAPACITY_MULTIPLIER
            object.__setattr__(self, "carrying_capacity", derived)

    @property
    def cooldown(self):
        """Seconds between two rounds of one agent. An explicit interaction_cooldown wins, otherwise
        an interaction speed converts to (1010 - speed) ms so payoff scale and cooldown move together."""
        if self.interaction_cooldown is not None:
            return self.interaction_cooldown
        if self.interaction_speed is not None:
            return cooldown_from_speed(self.interaction_speed)
        return DEFAULT_INTERACTION_COOLDOWN

    @property
    def payoff_scale(self):
        if self.interaction_speed is None:
            return 1.0
        return REFERENCE_INTERACTION_SPEED / self.interaction_speed

    @property
    def initial_population(self):
        return self.initial_per_strategy * len(self.enabled_strategies)

    def with_changes(self, **changes):
        """Fresh config for a reset, the running one is never mutated."""
        return replace(self, **changes)

    @classmethod
    def from_params(cls, params):
        """Builds a config from a flat parameter dict as handed over by a setup screen.
        Keys follow PARAM_TO_FIELD; values that fail conversion keep their default."""
        kwargs = {}
        for param_key, (field_name, field_type) in PARAM_TO_FIELD.items():
            if param_key not in params:
                continue
            try:
                kwargs[field_name] = field_type(params[param_key])
            except (TypeError, ValueError) as e:
                print(f"Error updating {field_name}: {e}")
        if "enabled_strategies" in params:
            enabled = params["enabled_strategies"]
            if isinstance(enabled, dict):
                enabled = [name for name, on in enabled.items() if on]
            kwargs["enabled_strategies"] = tuple(enabled)
        return cls(**kwargs)


def _millis(value):
    return float(value) / 1000.0


def _flag(value):
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


# Parameter to field mapping, keys as used by the setup screen. Durations are seconds except
# INTERACTION_COOLDOWN, which the setup screen hands over in milliseconds
PARAM_TO_FIELD = {
    "WORLD_WIDTH": ("world_width", float),
    "WORLD_HEIGHT": ("world_height", float),
    "INITIAL_CREATURES_PER_STRATEGY": ("initial_per_strategy", int),
    "CREATURE_RADIUS": ("creature_radius", float),
    "INTERACTION_DISTANCE": ("interaction_distance", float),
    "INTERACTION_COOLDOWN": ("interaction_cooldown", _millis),
    "INTERACTION_SPEED": ("interaction_speed", float),
    "REPRODUCTION_THRESHOLD": ("reproduction_threshold", float),
    "REPRODUCTION_COST": ("reproduction_cost", float),
    "MINIMUM_RESOURCE": ("minimum_resource", float),
    "MAINTENANCE_COST": ("maintenance_cost", float),
    "CARRYING_CAPACITY": ("carrying_capacity", int),
    "OVERPOPULATION_FACTOR": ("overpopulation_factor", float),
    "HARD_POPULATION_CUTOFF": ("hard_population_cutoff", _flag),
    "DEATH_RATE_FACTOR": ("death_rate_factor", float),
    "FOOD_SPAWN_RATE": ("food_spawn_rate", float),
    "FOOD_VALUE": ("food_value", float),
    "FOOD_TTL": ("food_ttl", float),
    "ERROR_RATE_INTERACTION": ("error_rate_interaction", float),
    "ERROR_RATE_MEMORY": ("error_rate_memory", float),
    "SPEED_RANDOM": ("speed_random", float),
    "SPEED_FOOD": ("speed_food", float),
    "SPEED_FLEE": ("speed_flee", float),
    "SPEED_CHASE": ("speed_chase", float),
    "MAX_SPEED": ("max_speed", float),
}
