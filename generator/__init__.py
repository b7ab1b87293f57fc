"""
Deterministic Directory Forest Generator.

Produces valid, reproducible reporting-line forests (and command streams
over them) for the org chart engine: property tests, fixtures, demos and
the backend sample endpoint.
"""

from .command_stream import generate_commands
from .deterministic_rng import DeterministicRNG
from .exporter import export_forest
from .forest_builder import GeneratorInvariantError, build_forest
from .forest_spec import ForestSpec

__all__ = [
    "DeterministicRNG",
    "export_forest",
    "generate_commands",
    "GeneratorInvariantError",
    "build_forest",
    "ForestSpec",
]
