"""
grapher: compile one-variable math expressions and find their asymptotes
and holes.
"""

__version__ = "0.1.0"
