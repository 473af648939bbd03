"""Grammars shared by the test modules."""
