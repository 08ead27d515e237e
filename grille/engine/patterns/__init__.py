"""Outer pattern generators. Importing a module registers its generator."""
