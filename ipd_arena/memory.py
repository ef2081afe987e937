from collections import deque

MEMORY_CAPACITY = 10


class MemoryStore:
    """Per-agent record of what each opponent did, keyed by opponent id.

    Only opponents actually met get an entry. Each entry is a bounded deque, oldest
    observation evicted first. Recording is noisy: with probability error_rate the
    stored action is the opposite of what was observed."""

    def __init__(self, rng, error_rate=0.0, capacity=MEMORY_CAPACITY):
        self.rng = rng
        self.error_rate = error_rate
        self.capacity = capacity
        self.histories = {}

    def record(self, opponent_id, observed_action):
        saved_action = -observed_action if self.rng.chance(self.error_rate) else observed_action
        history = self.histories.get(opponent_id)
        if history is None:
            history = deque(maxlen=self.capacity)
            self.histories[opponent_id] = history
        history.append(saved_action)
        return saved_action

    def get(self, opponent_id):
        return tuple(self.histories.get(opponent_id, ()))

    def __len__(self):
        return len(self.histories)

    def __contains__(self, opponent_id):
        return opponent_id in self.histories
