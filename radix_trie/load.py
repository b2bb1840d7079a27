""" Module for filling radix trees from JSON files of key/value pairs. """

from functools import wraps
import json
from typing import Any, Callable

from .prefix import ValidationError
from .tree import RadixTree


class KeyLoadError(ValueError):
    """ Raised if a key file can't be read, isn't a JSON object, or has keys that can't go in the tree. """


def try_load(func:Callable) -> Callable:
    """ Decorator to re-raise I/O and parsing exceptions with more general error messages for the end-user. """
    @wraps(func)
    def load(self, filename:str, *args) -> Any:
        try:
            return func(self, filename, *args)
        except KeyLoadError:
            raise
        except OSError as e:
            raise KeyLoadError(filename + ' is inaccessible or missing.') from e
        except ValidationError as e:
            raise KeyLoadError(f'{filename} has an invalid key: {e}') from e
        except (TypeError, ValueError) as e:
            raise KeyLoadError(filename + ' is not formatted correctly.') from e
    return load


class JSONKeyLoader:
    """ Loads JSON objects from disk and inserts every member into a tree, with the member name as the key. """

    def __init__(self, *, encoding='utf-8') -> None:
        self._encoding = encoding  # Character encoding. UTF-8 must be explicitly set on some platforms.

    @try_load
    def read(self, filename:str) -> dict:
        """ Load a string-keyed dict from a JSON file. """
        with open(filename, 'r', encoding=self._encoding) as fp:
            d = json.load(fp)
        if not isinstance(d, dict):
            raise KeyLoadError(filename + ' does not contain a JSON object.')
        return d

    @try_load
    def load_into(self, filename:str, tree:RadixTree) -> int:
        """ Insert everything from one file into <tree> and return the number of items read.
            The file is read completely before anything is inserted. """
        d = self.read(filename)
        # Check every key first so a bad one leaves the tree as it was.
        for k in d:
            tree.symbols.validate(k)
        tree.update(d)
        return len(d)

    def load_all(self, tree:RadixTree, *filenames:str) -> int:
        """ Load each file into <tree> in order. Later files overwrite values from earlier ones. """
        return sum([self.load_into(f, tree) for f in filenames])
