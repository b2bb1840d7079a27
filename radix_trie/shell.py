""" Module for a line-based command interpreter that operates on a single radix tree. """

import inspect
import sys
from typing import Callable, Dict, Iterable, TextIO

from .format import format_tree
from .load import JSONKeyLoader, KeyLoadError
from .parallel import ParallelSearch
from .prefix import ValidationError
from .tree import RadixTree, TreeStructureError


class ShellExit(Exception):
    """ Raised by a command to end the command loop. """


class CommandError(Exception):
    """ Raised if a command is unknown or has the wrong number of arguments. """


class TreeShell:
    """ Reads commands one line at a time and runs them on a tree. Results are written to an output stream.
        Errors in a command are reported and the loop goes on. Only 'quit', 'exit' or end of input stop it. """

    def __init__(self, tree:RadixTree, search:ParallelSearch=None, *,
                 out:TextIO=None, log:Callable[[str], None]=None) -> None:
        self._tree = tree                     # Tree to operate on.
        self._search = search or ParallelSearch(tree, workers=1)
        self._out = out or sys.stdout         # Output stream for command results.
        self._log = log or (lambda s: None)   # Logger for commands that change the tree.
        self._loader = JSONKeyLoader()
        self._commands: Dict[str, Callable] = {name[4:]: getattr(self, name)
                                               for name in dir(self) if name.startswith("cmd_")}
        self._commands["exit"] = self._commands["quit"]

    def _write(self, *lines:str) -> None:
        for line in lines:
            self._out.write(line + "\n")

    def cmd_set(self, key:str, *words:str) -> None:
        """ set KEY VALUE... - store the rest of the line under KEY. """
        if not words:
            raise CommandError("set requires a key and a value.")
        value = " ".join(words)
        self._tree.insert(key, value)
        self._log(f"Set {key!r}.")
        self._write("ok")

    def cmd_get(self, *keys:str) -> None:
        """ get KEY... - show the value stored under each KEY. """
        if not keys:
            raise CommandError("get requires at least one key.")
        found = self._search.find_all(keys)
        for k in keys:
            self._write(f"{k}: {found[k]}" if k in found else f"{k}: (none)")

    def cmd_find(self, key:str) -> None:
        """ find KEY - show the node KEY reaches exactly, even if it has no value. """
        node = self._tree.find(key)
        self._write("(none)" if node is None else repr(node))

    def cmd_prefix(self, prefix:str="") -> None:
        """ prefix [PREFIX] - show every value stored under a key starting with PREFIX. """
        values = self._search.values_with_prefix(prefix)
        self._write(*map(str, values))
        self._write(f"({len(values)} found)")

    def cmd_remove(self, key:str) -> None:
        """ remove KEY - remove the value under KEY and show it. """
        node = self._tree.remove(key)
        if node is None:
            self._write("(none)")
        else:
            self._log(f"Removed {key!r}.")
            self._write(f"removed: {node.value}")

    def cmd_delete(self, key:str) -> None:
        """ delete KEY - remove the value under KEY silently. """
        self._tree.delete(key)
        self._write("ok")

    def cmd_len(self) -> None:
        """ len - show the number of keys stored. """
        self._write(str(len(self._tree)))

    def cmd_print(self) -> None:
        """ print - draw the tree structure. """
        text = format_tree(self._tree)
        self._write(text or "(empty)")

    def cmd_check(self) -> None:
        """ check - verify the structure of the tree. """
        self._tree.validate()
        self._write("ok")

    def cmd_load(self, *filenames:str) -> None:
        """ load FILE... - insert every item from JSON object files. """
        if not filenames:
            raise CommandError("load requires at least one file name.")
        for f in filenames:
            count = self._loader.load_into(f, self._tree)
            self._log(f"Loaded {count} items from {f}.")
            self._write(f"loaded {count} items from {f}")

    def cmd_help(self) -> None:
        """ help - show this list. """
        for name in sorted(self._commands):
            doc = self._commands[name].__doc__
            if name != "exit" and doc:
                self._write(doc.strip())

    def cmd_quit(self) -> None:
        """ quit - leave the shell (also 'exit'). """
        raise ShellExit()

    def run_line(self, line:str) -> None:
        """ Split one line into a command name and arguments and run it. Blank lines do nothing. """
        name, *args = line.split() or [""]
        if not name:
            return
        cmd = self._commands.get(name.lower())
        if cmd is None:
            raise CommandError(f'Unknown command "{name}". Type "help" for a list.')
        try:
            inspect.signature(cmd).bind(*args)
        except TypeError:
            raise CommandError(f'Wrong arguments for "{name}". Type "help" for usage.') from None
        cmd(*args)

    def run(self, lines:Iterable[str], prompt="") -> int:
        """ Run commands from <lines> until the input ends or a quit command. Return an exit code. """
        if prompt:
            self._out.write(prompt)
            self._out.flush()
        for line in lines:
            try:
                self.run_line(line)
            except ShellExit:
                break
            except (CommandError, ValidationError, KeyLoadError, TreeStructureError) as e:
                self._write(f"error: {e}")
            if prompt:
                self._out.write(prompt)
                self._out.flush()
        return 0

