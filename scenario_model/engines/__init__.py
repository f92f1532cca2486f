"""Simulation engines."""

from .simulation import (
    SimulationSnapshot,
    SimulationState,
    simulate,
    simulate_states,
    step,
)

__all__ = [
    "SimulationSnapshot",
    "SimulationState",
    "simulate",
    "simulate_states",
    "step",
]
