'''Evaluate the results of the elections.

There are two basic election types - selections and distributions.
In selections, each candidate (usually a physical person) is either
elected or not elected.
In distributions, some candidates (usually parties) are allocated
a positive number of seats (seats are distributed among the parties),
while other parties get none.

*Selection evaluators* return a list of candidates, winners first.

*Distribution evaluators* return a dictionary mapping parties to the number
of seats. The public allocation function
:func:`proportional.allocate_seats_proportionally` lists every party,
including those with no seats.

On top of these, the modules :mod:`plurality`, :mod:`listpr`, :mod:`mixed`
and :mod:`college` provide result processors that turn an election with
candidates and votes into a complete election outcome.
'''

from electsim.evaluate.core import *    # noqa
