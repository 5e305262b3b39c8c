"""Input/output of election scenarios.

The :mod:`scenario` module loads complete election scenarios (the election,
the parties and optionally the simulated votes) from JSON files.
"""
