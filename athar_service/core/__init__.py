"""
Core utilities for the Athar service: settings, database, logging, errors and
application wiring.
"""
