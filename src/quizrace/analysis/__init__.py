"""Batch analysis tools."""

from .montecarlo import MonteCarloRunner, SimulationResults, TeamStatistics

__all__ = ["MonteCarloRunner", "SimulationResults", "TeamStatistics"]
