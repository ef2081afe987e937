import math

import numpy as np


class RandomSource:
    """Seedable uniform sampling shared by every stochastic part of the arena.
    Wraps a numpy Generator so a run can be replayed from its seed."""

    def __init__(self, seed=None):
        self.seed = seed
        self.generator = np.random.default_rng(seed)

    def random(self):
        return float(self.generator.random())

    def uniform(self, low, high):
        return float(self.generator.uniform(low, high))

    def chance(self, probability):
        return self.random() < probability

    def unit_vector(self):
        angle = self.uniform(0.0, 2 * math.pi)
        return math.cos(angle), math.sin(angle)
