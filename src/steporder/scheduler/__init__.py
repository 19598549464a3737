"""Scheduler package - dependency-ordered task scheduling.

This package provides:
- SerialWalker: lexical-greedy topological order, one task at a time
- WorkerPoolSimulator: discrete-event simulation of N identical workers
- SchedulingService: builds the graph from edges and runs the configured algorithm

Configuration:
- SchedulingConfig: Main configuration (algorithm, worker pool)
- AlgorithmConfig: Algorithm selection
- WorkerPoolConfig: Worker count and fixed overhead
"""

# Algorithms
from .algorithms import (
    SerialWalker,
    WorkerPoolSimulator,
    create_algorithm,
    serial_walk,
    simulate,
)

# Configuration
from .config import AlgorithmConfig, AlgorithmType, SchedulingConfig, WorkerPoolConfig

# Core dataclasses
from .core import (
    AlgorithmResult,
    ScheduledStep,
    SchedulingResult,
    WorkerSlot,
    letter_cost,
)

# Protocols
from .protocols import CostFunction, SchedulingAlgorithm

# High-level service
from .service import SchedulingService

__all__ = [
    # Core dataclasses
    "AlgorithmResult",
    "ScheduledStep",
    "SchedulingResult",
    "WorkerSlot",
    "letter_cost",
    # Configuration
    "SchedulingConfig",
    "AlgorithmConfig",
    "AlgorithmType",
    "WorkerPoolConfig",
    # Protocols
    "CostFunction",
    "SchedulingAlgorithm",
    # High-level service
    "SchedulingService",
    # Algorithms
    "SerialWalker",
    "WorkerPoolSimulator",
    "create_algorithm",
    "serial_walk",
    "simulate",
]
