"""Deterministic health and economic intervention simulation.

Baseline resolver -> intervention effect model -> trajectory integrator ->
impact summarizer. Importable without any running service.
"""
