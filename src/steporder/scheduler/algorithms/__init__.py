"""Algorithm factory and exports."""

from steporder.graph import DependencyGraph

from ..config import AlgorithmType, SchedulingConfig
from ..protocols import CostFunction
from .serial_walk import SerialWalker, serial_walk
from .worker_pool import WorkerPoolSimulator, simulate


def create_algorithm(
    algorithm_type: AlgorithmType,
    graph: DependencyGraph,
    *,
    config: SchedulingConfig | None = None,
    cost: CostFunction | None = None,
) -> SerialWalker | WorkerPoolSimulator:
    """Create a scheduling algorithm instance.

    Args:
        algorithm_type: Type of algorithm to create
        graph: Dependency graph to schedule
        config: Optional scheduling configuration (worker-pool parameters)
        cost: Optional task duration function for the worker pool

    Returns:
        Algorithm instance ready to schedule
    """
    effective_config = config or SchedulingConfig()

    if algorithm_type == AlgorithmType.SERIAL:
        return SerialWalker(graph)

    if algorithm_type == AlgorithmType.WORKER_POOL:
        return WorkerPoolSimulator(
            graph,
            worker_count=effective_config.workers.worker_count,
            fixed_overhead=effective_config.workers.fixed_overhead,
            cost=cost,
        )

    msg = f"Unknown algorithm type: {algorithm_type}"
    raise ValueError(msg)


__all__ = [
    "SerialWalker",
    "WorkerPoolSimulator",
    "create_algorithm",
    "serial_walk",
    "simulate",
]
