#!/usr/bin/env python3

""" Master console script and primary entry point for radix_trie.
    The first command-line argument names an application mode. Any unique prefix of a mode name works, and
    with no mode (or an option where the mode should be) the shell is run. The chosen mode's module is only
    imported once it has been chosen. """

import importlib
import sys
from typing import List, Mapping, Tuple

# Main module and description for each mode.
MODES = {
    "shell": ("radix_trie.main_shell", "Run tree commands from standard input (default)."),
    "dump":  ("radix_trie.main_dump",  "Load JSON key files and print the tree structure.")
}
DEFAULT_MODE = "shell"


def match_modes(arg:str, modes:Mapping[str, tuple]=MODES) -> List[str]:
    """ Return the names of every mode <arg> could mean. An exact name always wins over longer names. """
    if arg in modes:
        return [arg]
    return [name for name in modes if name.startswith(arg)]


def split_mode(argv:List[str]) -> Tuple[str, List[str]]:
    """ Take the mode argument out of <argv> and fold it into the script name, so help text shows both. """
    script, *args = argv or [""]
    if not args or args[0].startswith("-"):
        return DEFAULT_MODE, [script, *args]
    mode, *rest = args
    return mode, [f"{script} {mode}", *rest]


def mode_error(message:str, modes:Mapping[str, tuple]=MODES) -> str:
    lines = [message, "", "Available modes:"]
    lines += [f"  {name:<8}{desc}" for name, (_, desc) in modes.items()]
    return "\n".join(lines)


def main(argv:List[str]=None) -> int:
    mode, argv = split_mode([*(sys.argv if argv is None else argv)])
    matches = match_modes(mode)
    if len(matches) != 1:
        if matches:
            message = f'Mode "{mode}" could mean any of: {", ".join(matches)}. Use more characters.'
        else:
            message = f'No mode named "{mode}".'
        print(mode_error(message))
        return -1
    module_name, _ = MODES[matches[0]]
    module = importlib.import_module(module_name)
    return module.main(argv)


if __name__ == '__main__':
    sys.exit(main())
