"""steporder - dependency-ordered step scheduling and worker-pool simulation."""

__version__ = "0.1.0"
