""" Package for a path-compressed prefix tree (radix tree / PATRICIA trie) and the small programs built on it:

    prefix - The one primitive every tree operation shares: the longest common prefix of two symbol sequences.
    Keys are turned into symbol sequences by a symbol set. Text keys are matched by code point, so a label never
    ends halfway through a character. Byte keys are matched by byte. Bad keys raise ValidationError on insert.

    node - A node owns its children (keyed by the first symbol of their labels), a label, and an optional value.
    Nodes know nothing about their parents. Removal records the path it took instead.

    tree - The container itself. Insertion splits nodes where a key diverges inside a label, and removal merges
    or detaches nodes left without a purpose, all the way up the path if needed. Exact lookup, prefix lookup
    and a full dict-like interface are layered on top.

    format - Draws a tree as indented text for debugging.

    parallel - Runs batches of read-only lookups in a thread pool. Single lookups are always sequential.

    load - Fills trees from JSON files of key/value objects.

    shell - A command interpreter for poking at a tree by hand.

    __main__ - When radix_trie is run directly as a script, the first command-line argument chooses the
    application: the interactive shell (default) or the dump tool. """

from radix_trie.node import RadixNode
from radix_trie.prefix import (BYTE_SYMBOLS, ByteSymbols, get_symbols, longest_common_prefix, TEXT_SYMBOLS,
                               TextSymbols, ValidationError)
from radix_trie.tree import new, RadixTree, TreeStructureError
