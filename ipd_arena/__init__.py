"""Spatial Iterated Prisoner's Dilemma arena: strategies compete for resources in continuous 2-D space."""

from .config import SimulationConfig
from .simulation import Simulation
from .strategies import Strategy, COOPERATE, DEFECT

__all__ = ["SimulationConfig", "Simulation", "Strategy", "COOPERATE", "DEFECT"]
