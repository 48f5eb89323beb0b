"""
AppForge: natural-language to validated mini-app generation.

Turns a short description into a single React + TypeScript component using a
pluggable text-generation provider, checks it with an external type-checker,
and keeps a catalog of the generated apps so they can be listed, edited and
deleted later.
"""

__version__ = "1.0.0"
__author__ = "AppForge Team"
