"""Configuration classes for the scheduling system."""

from enum import Enum

from pydantic import BaseModel, Field


class AlgorithmType(str, Enum):
    """Available scheduling algorithms."""

    SERIAL = "serial"  # Single resource, one task at a time
    WORKER_POOL = "worker_pool"  # Fixed pool of identical workers


class AlgorithmConfig(BaseModel):
    """Configuration for algorithm selection."""

    type: AlgorithmType = AlgorithmType.WORKER_POOL


class WorkerPoolConfig(BaseModel):
    """Configuration for the worker-pool simulation."""

    worker_count: int = Field(default=4, ge=1)
    # Added to every task's letter cost
    fixed_overhead: int = Field(default=60, ge=0)


class SchedulingConfig(BaseModel):
    """Configuration for algorithm selection and worker-pool parameters."""

    algorithm: AlgorithmConfig = AlgorithmConfig()
    workers: WorkerPoolConfig = WorkerPoolConfig()
