"""gitscope — explore a GitHub account from the terminal.

Aggregates profile, repositories, branch history and README data into a
ranked contributor list, a repository timeline and a Gemini-written
repository summary.
"""

__version__ = "0.1.0"
