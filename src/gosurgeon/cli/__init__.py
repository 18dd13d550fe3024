"""
CLI Command Modules

Each module contains a logical group of related commands; main.py
registers them as top-level commands.
"""

from gosurgeon.cli import queries, mutations

__all__ = ['queries', 'mutations']
