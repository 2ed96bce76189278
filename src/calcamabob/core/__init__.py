"""Calcamabob core: IR types, errors, configuration, and the expression language."""
