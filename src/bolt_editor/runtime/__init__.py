"""Runtime services: logging and profiling."""
