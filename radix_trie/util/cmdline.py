""" Module for user-configurable command-line options. """

import os
import sys
from typing import Any, Iterable, List, Tuple

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}
_HELP_KEYS = ("-h", "--help")


def parse_bool(s:str) -> bool:
    """ bool('False') is True, so flags need their own conversion. """
    lowered = s.lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ValueError(f'"{s}" is not a yes/no value.')


def group_args(args:Iterable[str]) -> Tuple[List[str], List[List[str]]]:
    """
    Split arguments into the plain ones in front of every option, and a group for each option.
    An option starts with '-'. It takes the text after its first '=' (if any) and every plain argument up to the
    next option. Groups keep the raw strings, so an unknown option can be handed back exactly as it was given.

        leading          group                     group      group
    |-----------| |--------------------------| |-------| |------------|
     stray words  --load=a.json b.json c.json  --verbose --symbols=text
    """
    leading = []
    groups = []
    for s in args:
        if s.startswith('-'):
            groups.append([s])
        elif groups:
            groups[-1].append(s)
        else:
            leading.append(s)
    return leading, groups


class CmdlineOption:
    """ A single --name option. Its type is taken from the default value: flags (bool) may be given with no
        argument to mean True, lists take any number of arguments, and anything else takes exactly one. """

    def __init__(self, name:str, default:Any=None, desc="No description.") -> None:
        self.key = "--" + name                # Option key as typed on the command line.
        self.attr = name.replace("-", "_")    # Attribute to hold the value. Attribute names cannot have hyphens.
        self.default = default                # Value of the attribute until the option is parsed.
        self.desc = desc                      # Description to be displayed in help.
        self._type = str if default is None else type(default)

    def _is_list(self) -> bool:
        return issubclass(self._type, (list, tuple))

    def convert(self, args:List[str]) -> Any:
        """ Turn the argument strings given with this option into a value. Raise ValueError if they don't fit. """
        if self._is_list():
            return self._type([a for a in args if a])
        if self._type is bool and not args:
            return True
        if len(args) != 1:
            raise ValueError(f'Option {self.key} takes exactly one argument, got {len(args)}.')
        [arg] = args
        if self._type is bool:
            return parse_bool(arg)
        return self._type(arg)

    def usage(self) -> str:
        if self._is_list():
            return self.key + '=<str> [<str> ...]'
        if self._type is bool:
            return self.key + '[=<bool>]'
        return f'{self.key}=<{self._type.__name__}>'


class CmdlineOptions:
    """ Namespace class for command-line options. Option values are accessed as instance attributes.
        Options that were never parsed keep their default values. """

    def __init__(self, app_description="Command line application.") -> None:
        self._app_description = app_description  # App description shown in command-line help.
        self._options = {}  # Option objects by key.
        self._extras = []   # Arguments left over from the last parse.

    def __getattr__(self, name:str) -> Any:
        raise AttributeError(f'"{name}" is not the name of a valid command-line option.')

    def add(self, name:str, default:Any=None, desc="No description.") -> None:
        """ Add a new option and set its attribute to the default value. """
        opt = CmdlineOption(name, default, desc)
        self._options[opt.key] = opt
        setattr(self, opt.attr, default)

    def format_help(self, script_name="") -> str:
        """ Return a description, a usage line, and one line per option with its description lined up. """
        usages = [f'[{opt.usage()}]' for opt in self._options.values()]
        rows = [(", ".join(_HELP_KEYS), "Show this help message and exit.")]
        rows += [(opt.key, opt.desc) for opt in self._options.values()]
        width = max(len(keys) for keys, _ in rows) + 2
        lines = [self._app_description,
                 " ".join(["usage:", script_name or "<script>", "[-h]", *usages]),
                 ""]
        lines += ["  " + keys.ljust(width) + desc for keys, desc in rows]
        return "\n".join(lines) + "\n"

    def parse(self, argv:Iterable[str]=None) -> None:
        """ Parse options into instance attributes. <argv> starts with the script name like sys.argv (the default).
            Plain arguments and unknown options are saved for extras(). A help option prints help and exits. """
        script, *args = [*(sys.argv if argv is None else argv)] or [""]
        leading, groups = group_args(args)
        extras = leading
        values = {}
        for group in groups:
            s, *args = group
            key, *eq = s.split('=', 1)
            if key in _HELP_KEYS:
                sys.stdout.write(self.format_help(os.path.basename(script)))
                sys.exit(0)
            opt = self._options.get(key)
            if opt is None:
                extras += group
            else:
                values[opt.attr] = opt.convert([*eq, *args])
        self.__dict__.update(values)
        self._extras = extras

    def extras(self) -> List[str]:
        return self._extras[:]
