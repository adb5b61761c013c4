"""
needle_ring Package
===================

A reflex arcade game: a needle sweeps around a ring and the player must
press Space while it overlaps the red target zone. Each hit reverses the
needle, moves the target and speeds the needle up; a miss ends the round.

Tunable parameters are in game_config.yaml.
"""
