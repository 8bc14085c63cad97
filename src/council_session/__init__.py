"""council-session - multi-persona consultation sessions.

A session moves from the caller's request through optional clarification
questions and bounded debate cycles to a consolidated final answer.
"""

__version__ = "0.1.0"
