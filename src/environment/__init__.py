"""Gymnasium environment for the blast puzzle."""
from .blast_env import BlastEnv

__all__ = [
    "BlastEnv",
]
