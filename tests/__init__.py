"""GHIS test suite."""
