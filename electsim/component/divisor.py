'''Divisor functions used in highest-averages seat allocation.

This provides arguments for the
:class:`electsim.evaluate.proportional.HighestAverages` evaluator.

A divisor function takes the order number (the number of seats allocated to
the party so far) and returns the divisor by which to divide the number
of votes for the given party. The party with the largest quotient then gets
the next seat.

All supported divisor functions are assembled in the `DIVISORS` dictionary
keyed by their name. `get()` retrieves from this dictionary by string key
or by one of the alternative spellings in `DIVISOR_ALIASES`; `construct()`
also accepts callables and passes them through.
'''

from typing import Callable
from numbers import Number

import electsim.component.core


DIVISORS = {}

DIVISOR_ALIASES = {
    'dHondt': 'd_hondt',
    'DHondt': 'd_hondt',
    'dhondt': 'd_hondt',
    'SainteLague': 'sainte_lague',
    'sainteLague': 'sainte_lague',
    'sainte-lague': 'sainte_lague',
    'webster': 'sainte_lague',
}


divisor_mark, get, construct = electsim.component.core.register_functions(
    DIVISORS, 'divisor', Callable[[int], Number], aliases=DIVISOR_ALIASES
)


@divisor_mark
def d_hondt(order: int) -> int:
    '''D'Hondt divisor, the most commonly used divisor.

    Forms a simple sequence 1, 2, 3...

    Known to slightly favor larger parties.
    '''
    return order + 1


@divisor_mark
def sainte_lague(order: int) -> int:
    '''Sainte-Laguë (Webster) divisor.

    Forms a sequence 1, 3, 5...

    Known to favor mid-sized parties.
    '''
    return 2 * order + 1
