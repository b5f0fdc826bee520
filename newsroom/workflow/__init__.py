"""
Editorial workflow core: lifecycle transitions, schedule sets and read queries.
"""
