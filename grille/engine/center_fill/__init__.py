"""Center-fill generators. Importing a module registers its generator."""
