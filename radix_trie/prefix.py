""" Module for the prefix-matching primitive and the symbol sets that key a radix tree. """

from typing import Sequence, Tuple, TypeVar, Union

S = TypeVar("S", str, bytes)  # Symbol sequence type. A whole tree uses one of them consistently.
RawKey = Union[str, bytes, bytearray]


class ValidationError(ValueError):
    """ Raised if a key is empty or is not validly encoded for the tree's symbol set. """


def longest_common_prefix(a:S, b:S) -> Tuple[S, int]:
    """ Return the longest sequence that starts both <a> and <b>, along with its length in symbols.
        Indexing a str steps one code point at a time, so a text prefix never ends inside a character. """
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return a[:n], n


def prefix_byte_length(prefix:Union[str, bytes]) -> int:
    """ Return the size of <prefix> in bytes as it would be encoded in UTF-8. """
    if isinstance(prefix, str):
        return len(prefix.encode('utf-8'))
    return len(prefix)


class SymbolSet:
    """ Abstract set of rules for turning user keys into symbol sequences.
        Child nodes are keyed by the first item of their label, whatever type indexing produces. """

    name = ""             # Name used to select this symbol set from the command line.
    empty: Sequence = ""  # The empty sequence. Labels the root of every tree.

    def convert(self, key:RawKey) -> Sequence:
        """ Return <key> as a sequence of this type's symbols. Raise ValidationError if it cannot be one. """
        raise NotImplementedError

    def validate(self, key:RawKey) -> Sequence:
        """ Convert a key for insertion. Empty keys are never allowed to be stored. """
        seq = self.convert(key)
        if not seq:
            raise ValidationError("Keys must not be empty.")
        return seq

    def try_convert(self, key:RawKey) -> Sequence:
        """ Convert a key for lookup. Lookups never fail, so invalid keys come back as None. """
        try:
            return self.convert(key)
        except ValidationError:
            return None

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}>'


class TextSymbols(SymbolSet):
    """ Keys are Unicode text matched one code point at a time. Byte strings are decoded as UTF-8. """

    name = "text"
    empty = ""

    def convert(self, key:RawKey) -> str:
        if isinstance(key, (bytes, bytearray)):
            try:
                return bytes(key).decode('utf-8')
            except UnicodeDecodeError as e:
                raise ValidationError(f'{key!r} is not valid UTF-8 text.') from e
        if not isinstance(key, str):
            raise ValidationError(f'Keys must be text, not {type(key).__name__}.')
        # Lone surrogates can live in a str, but they are not encodable text.
        try:
            key.encode('utf-8')
        except UnicodeEncodeError as e:
            raise ValidationError(f'{key!r} contains characters that cannot be encoded.') from e
        return key


class ByteSymbols(SymbolSet):
    """ Keys are raw byte strings matched one byte at a time. Text is encoded as UTF-8 first.
        Labels in this kind of tree may split a multi-byte character between two nodes. """

    name = "bytes"
    empty = b""

    def convert(self, key:RawKey) -> bytes:
        if isinstance(key, str):
            try:
                return key.encode('utf-8')
            except UnicodeEncodeError as e:
                raise ValidationError(f'{key!r} contains characters that cannot be encoded.') from e
        if not isinstance(key, (bytes, bytearray)):
            raise ValidationError(f'Keys must be bytes, not {type(key).__name__}.')
        return bytes(key)


TEXT_SYMBOLS = TextSymbols()
BYTE_SYMBOLS = ByteSymbols()
_SYMBOLS_BY_NAME = {s.name: s for s in [TEXT_SYMBOLS, BYTE_SYMBOLS]}


def get_symbols(name:str) -> SymbolSet:
    """ Look up a symbol set by name. """
    try:
        return _SYMBOLS_BY_NAME[name]
    except KeyError:
        valid = ", ".join(_SYMBOLS_BY_NAME)
        raise ValueError(f'Unknown symbol set "{name}". Valid choices are: {valid}.') from None
