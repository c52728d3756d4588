"""CLI package for Librarian"""
from .main import cli

__all__ = ['cli']
