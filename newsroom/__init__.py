"""
Newsroom workflow API: article lifecycle, per-platform schedules and the sweep.
"""
