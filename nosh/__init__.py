"""nosh-planner: cooking personality, recipe feed and weekly dinner plans."""

__version__ = "1.0.0"
