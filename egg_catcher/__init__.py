"""
Egg Catcher Package
===================

Core simulation, configuration and evaluation for the Egg Catcher arcade game:

- Catcher and falling egg models
- Clamped-timestep frame loop
- Spawn scheduling and difficulty ramp
- Catch/miss resolution, scoring and lives

All tunable parameters are in game_config.yaml.
"""
