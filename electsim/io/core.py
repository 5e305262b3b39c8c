"""Shared functionality for scenario file I/O. Internal."""

import typing
from typing import Any, Callable, Tuple, TextIO


class ParseError(Exception):
    """An input that is invalid according to the given format was detected."""
    pass


def loaders(text_loader: Callable[..., Any]
            ) -> Tuple[Callable[..., Any], Callable[..., Any]]:
    """Create load() and loads() functions from a text parsing function."""
    return_annot = typing.get_type_hints(text_loader).get('return')
    if return_annot is None:
        return_annot = Any

    def load(file: TextIO, **kwargs) -> return_annot:
        return text_loader(file.read(), **kwargs)

    def loads(text: str, **kwargs) -> return_annot:
        return text_loader(text, **kwargs)

    return load, loads
