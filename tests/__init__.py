"""Test package for the music puzzle controller.

The controller tests are pure and deterministic (seeded RNG, fake clock).
The audio adapter test uses pygame's dummy audio driver so no sound device
is needed.  Run ``pytest`` from the project root.
"""
