"""High-level scheduling service."""

from collections.abc import Iterable

from steporder.graph import DependencyGraph
from steporder.logger import get_logger

from .algorithms import create_algorithm
from .config import SchedulingConfig
from .core import SchedulingResult
from .protocols import CostFunction

logger = get_logger()


class SchedulingService:
    """Builds the dependency graph from edges and runs the configured algorithm."""

    def __init__(
        self,
        edges: Iterable[tuple[str, str]],
        config: SchedulingConfig | None = None,
        cost: CostFunction | None = None,
    ):
        """Initialize scheduling service.

        Args:
            edges: (predecessor, successor) pairs from the parser
            config: Optional scheduling configuration
            cost: Optional task duration function for worker-pool runs
        """
        self.config = config or SchedulingConfig()
        self.cost = cost
        self.graph = DependencyGraph.build(edges)

    def schedule(self) -> SchedulingResult:
        """Run the configured algorithm over the graph.

        Returns:
            SchedulingResult with completion order and, for worker-pool
            runs, total time and timeline
        """
        algorithm_type = self.config.algorithm.type
        logger.debug(
            f"Scheduling {len(self.graph)} tasks with {algorithm_type.value} "
            f"(workers={self.config.workers.worker_count}, "
            f"overhead={self.config.workers.fixed_overhead})"
        )

        algorithm = create_algorithm(algorithm_type, self.graph, config=self.config, cost=self.cost)
        result = algorithm.schedule()

        return SchedulingResult(
            algorithm=algorithm_type.value,
            completion_order=result.completion_order,
            total_time=result.total_time,
            task_count=len(self.graph),
            timeline=result.timeline,
        )
