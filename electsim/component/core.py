'''Common functionality for components.

Functions to build function registers and retrievers around them.
A register maps canonical names to functions; an optional alias table maps
alternative spellings (such as ``dHondt`` for ``d_hondt``) to the canonical
names. There should normally be no need to use these functions directly.
'''

from typing import Callable, Dict, Optional, Union


def marker(register: Dict[str, Callable],
           name: str,
           signature,
           aliases: Optional[Dict[str, str]] = None,
           ) -> Callable[[Callable], Callable]:
    '''A registration decorator factory.'''
    def mark_function(func):
        register[func.__name__] = func
        return func
    return mark_function


def getter(register: Dict[str, Callable],
           name: str,
           signature,
           aliases: Optional[Dict[str, str]] = None,
           ) -> Callable[[str], Callable]:
    '''A register retriever factory.

    The retriever tries the canonical names first and the aliases second.
    '''
    if aliases is None:
        aliases = {}

    def get(func_def: str) -> signature:
        f'''Return a {name} function by its name or alias.'''
        if func_def in register:
            return register[func_def]
        elif func_def in aliases:
            return register[aliases[func_def]]
        else:
            raise KeyError(f'unknown {name}: {func_def}')
    return get


def constructer(register: Dict[str, Callable],
                name: str,
                signature,
                aliases: Optional[Dict[str, str]] = None,
                ) -> Callable[[Union[str, Callable]], Callable]:
    '''A register implicit retriever/passthrough function factory.'''
    get = getter(register, name, signature, aliases)

    def construct(func_def: Union[str, signature]
                  ) -> signature:
        f'''Construct a {name} function.

        Get a {name} function by its name from the register. If a custom
        callable is given, pass it through unchanged.
        '''
        return func_def if hasattr(func_def, '__call__') else get(func_def)

    return construct


def register_functions(*args, **kwargs):
    '''Construct the marker, getter and constructer functions at one call.'''
    return (
        marker(*args, **kwargs),
        getter(*args, **kwargs),
        constructer(*args, **kwargs),
    )
