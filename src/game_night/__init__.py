"""Game Night Planner backend."""
