from enum import Enum

#actions use the same encoding as the payoff table: 1 for cooperate, -1 for defect, so negating an action flips it
COOPERATE = 1
DEFECT = -1

#win-stay-lose-shift starts out as if it had just cooperated and been rewarded
WSLS_INITIAL_ACTION = COOPERATE
WSLS_INITIAL_PAYOFF = 3.0


class Strategy(str, Enum):
    ALWAYS_COOPERATE = "always cooperate"
    ALWAYS_DEFECT = "always defect"
    TIT_FOR_TAT = "tit-for-tat"
    TIT_FOR_TWO_TATS = "tit-for-two-tats"
    WIN_STAY_LOSE_SHIFT = "win-stay-lose-shift"
    GRIM_TRIGGER = "grim trigger"
    RANDOM = "random"


#strategy catalogue, the classic entries of Axelrod's tournament:
# long_name: display name
# short_name: abbreviation used in stats lines and the viewer legend
# description: one-line summary of the decision rule
STRATEGY_INFO = {
    Strategy.TIT_FOR_TAT: {
        "long_name": "Tit-for-Tat",
        "short_name": "TFT",
        "description": "Start cooperating, then copy opponent's last move",
    },
    Strategy.TIT_FOR_TWO_TATS: {
        "long_name": "Tit-for-Two-Tats",
        "short_name": "TFTT",
        "description": "Only defect if opponent defects twice in a row",
    },
    Strategy.WIN_STAY_LOSE_SHIFT: {
        "long_name": "Win-Stay Lose-Shift",
        "short_name": "WSLS",
        "description": "Repeat last move if good outcome, change if bad outcome",
    },
    Strategy.ALWAYS_COOPERATE: {
        "long_name": "Always Cooperate",
        "short_name": "ALLC",
        "description": "Always cooperate no matter what",
    },
    Strategy.ALWAYS_DEFECT: {
        "long_name": "Always Defect",
        "short_name": "ALLD",
        "description": "Always defect no matter what",
    },
    Strategy.GRIM_TRIGGER: {
        "long_name": "Grim Trigger",
        "short_name": "GRIM",
        "description": "Cooperate until opponent defects, then always defect",
    },
    Strategy.RANDOM: {
        "long_name": "Random",
        "short_name": "RAND",
        "description": "Choose randomly between cooperation and defection",
    },
}

#seeding and stats order
STRATEGY_ORDER = [
    Strategy.ALWAYS_COOPERATE,
    Strategy.ALWAYS_DEFECT,
    Strategy.TIT_FOR_TAT,
    Strategy.TIT_FOR_TWO_TATS,
    Strategy.WIN_STAY_LOSE_SHIFT,
    Strategy.GRIM_TRIGGER,
    Strategy.RANDOM,
]

DEFAULT_ENABLED = (
    Strategy.ALWAYS_COOPERATE,
    Strategy.ALWAYS_DEFECT,
    Strategy.TIT_FOR_TAT,
    Strategy.RANDOM,
)


def parse_strategy(name):
    """Accepts an enum member, its value ("tit-for-tat") or its short name ("TFT")."""
    if isinstance(name, Strategy):
        return name
    for strategy, info in STRATEGY_INFO.items():
        if name == strategy.value or str(name).upper() == info["short_name"]:
            return strategy
    available = [s.value for s in STRATEGY_ORDER]
    raise ValueError(f"Unknown strategy: {name}. Available: {available}")


def short_name(strategy):
    return STRATEGY_INFO[strategy]["short_name"]


def flip(action):
    return -action


def decide(strategy, opponent_history, state, rng):
    """Intended action of an agent playing `strategy` against one opponent.

    opponent_history: that opponent's observed actions, oldest first (may be empty)
    state: the agent's own StrategyState, read only by win-stay-lose-shift
    rng: RandomSource, drawn from only by the random strategy
    Execution noise is not applied here, see act()."""
    if strategy == Strategy.ALWAYS_COOPERATE:
        return COOPERATE
    if strategy == Strategy.ALWAYS_DEFECT:
        return DEFECT
    if strategy == Strategy.TIT_FOR_TAT:
        return opponent_history[-1] if opponent_history else COOPERATE
    if strategy == Strategy.TIT_FOR_TWO_TATS:
        if len(opponent_history) >= 2 and opponent_history[-1] == DEFECT and opponent_history[-2] == DEFECT:
            return DEFECT
        return COOPERATE
    if strategy == Strategy.GRIM_TRIGGER:
        #the trigger lives in the history itself
        return DEFECT if DEFECT in opponent_history else COOPERATE
    if strategy == Strategy.WIN_STAY_LOSE_SHIFT:
        return state.last_action if state.last_payoff > 0 else flip(state.last_action)
    if strategy == Strategy.RANDOM:
        return COOPERATE if rng.random() < 0.5 else DEFECT
    #unknown tags never get past SimulationConfig, cooperate if one does
    return COOPERATE


def act(strategy, opponent_history, state, rng, error_rate):
    """decide() followed by execution noise: the intended action is flipped with probability error_rate."""
    action = decide(strategy, opponent_history, state, rng)
    if rng.chance(error_rate):
        action = flip(action)
    return action
