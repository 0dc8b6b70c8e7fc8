"""Business logic services for the Game Night Planner.

Each module exposes plain functions taking a SQLAlchemy ``Session`` and the
resolved caller. Checks run before writes and every mutation commits once.
"""
