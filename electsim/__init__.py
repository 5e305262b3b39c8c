"""Electsim - a library for computing simulated election outcomes.

Electsim objects take a field of candidates or parties with their polling
standings and turn them into an election outcome under one of several
electoral systems.

An election outcome is computed in the following steps:

-   The pool of cast votes is split among the candidates in proportion to
    their polling. This is done by the ``distribute`` module.
-   The votes are evaluated under the election's electoral system. The
    ``evaluate`` subpackage holds the evaluators: proportional seat allocation
    by highest averages, plurality (first-past-the-post), party-list
    proportional representation, mixed-member proportional representation
    with overhang resolution and the state-by-state electoral college.
-   For the electoral college, the ``electoral`` subpackage also simulates
    the election night, with states reporting their counts progressively
    and calling their results at different times.

The :func:`system.calculate_election_outcome` function ties these together
and dispatches to the correct evaluator by the electoral system name.
"""
