""" Tests for the programs and utilities built on the tree: rendering, parallel search, loading, and the shell. """

import io
import json
import sys

import pytest

from radix_trie import BYTE_SYMBOLS, RadixTree
from radix_trie.format import format_tree, print_tree
from radix_trie.load import JSONKeyLoader, KeyLoadError
from radix_trie.options import RadixOptions
from radix_trie.parallel import ParallelSearch
from radix_trie.shell import CommandError, TreeShell
from radix_trie.__main__ import match_modes, split_mode
from radix_trie.util.log import StreamLogger

from . import get_test_filename, TEST_WORDS


def _example_tree() -> RadixTree:
    t = RadixTree()
    t.insert("ab", 1)
    t.insert("a", 2)
    t.insert("abd", 3)
    t.insert("b", 4)
    return t


def test_format() -> None:
    assert format_tree(_example_tree()) == ("'a'  value: 2\n"
                                            "\t'b'  value: 1\n"
                                            "\t\t'd'  value: 3\n"
                                            "'b'  value: 4")
    t = RadixTree({"abc": "x", "abd": "y"})
    assert format_tree(t, indent="  ") == ("'ab'  -\n"
                                           "  'c'  value: 'x'\n"
                                           "  'd'  value: 'y'")
    assert format_tree(RadixTree()) == ""


def test_format_bytes() -> None:
    t = RadixTree({"ð": 1, "ñ": 2}, symbols=BYTE_SYMBOLS)
    assert format_tree(t) == ("'\\xc3'  -\n"
                              "\t'\\xb0'  value: 1\n"
                              "\t'\\xb1'  value: 2")


def test_print_tree() -> None:
    buf = io.StringIO()
    print_tree(_example_tree(), buf)
    assert buf.getvalue().splitlines()[0] == "'a'  value: 2"
    buf = io.StringIO()
    print_tree(RadixTree(), buf)
    assert buf.getvalue() == ""


@pytest.mark.parametrize("workers", [1, 4])
def test_parallel_search(workers) -> None:
    """ Fanning out must give exactly what the sequential operations give. """
    t = RadixTree(TEST_WORDS)
    search = ParallelSearch(t, workers=workers)
    keys = [*TEST_WORDS, "tes", "missing", "", "ðo"]
    assert search.find_all(keys) == TEST_WORDS
    for prefix in ["", "r", "rub", "te", "ðomu", "日", "nothing"]:
        assert search.values_with_prefix(prefix) == t.get_all_with_prefix(prefix)


def test_parallel_search_stored_none() -> None:
    t = RadixTree({"k": None})
    assert ParallelSearch(t, workers=2).find_all(["k", "j"]) == {"k": None}


def test_loader(tmp_path) -> None:
    t = RadixTree()
    loader = JSONKeyLoader()
    assert loader.load_into(get_test_filename("words"), t) == len(TEST_WORDS)
    assert sorted(t.items()) == sorted(TEST_WORDS.items())
    extra = tmp_path / "extra.json"
    extra.write_text(json.dumps({"test": "new", "zz": 0}), encoding='utf-8')
    assert loader.load_all(t, str(extra)) == 2
    assert t["test"] == "new"
    assert len(t) == len(TEST_WORDS) + 1


def test_loader_errors(tmp_path) -> None:
    t = RadixTree({"keep": 1})
    loader = JSONKeyLoader()
    not_object = tmp_path / "list.json"
    not_object.write_text("[1, 2]", encoding='utf-8')
    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{not json", encoding='utf-8')
    bad_key = tmp_path / "key.json"
    bad_key.write_text(json.dumps({"fine": 1, "": 2}), encoding='utf-8')
    for path in [not_object, bad_json, bad_key, tmp_path / "missing.json"]:
        with pytest.raises(KeyLoadError):
            loader.load_into(str(path), t)
    # Nothing from the file with a bad key was inserted.
    assert t.items() == [("keep", 1)]


def _run_shell(*lines:str, tree:RadixTree=None) -> list:
    out = io.StringIO()
    log = []
    shell = TreeShell(tree if tree is not None else RadixTree(), out=out, log=log.append)
    assert shell.run(lines) == 0
    return out.getvalue().splitlines()


def test_shell() -> None:
    assert _run_shell("set test aa",
                      "set slow b b",
                      "",
                      "get test slow nope",
                      "remove slow",
                      "remove slow",
                      "len",
                      "bogus",
                      "get",
                      "set lonely",
                      "find",
                      "find te",
                      "find test",
                      "prefix te",
                      "quit",
                      "len") == ["ok",
                                 "ok",
                                 "test: aa",
                                 "slow: b b",
                                 "nope: (none)",
                                 "removed: b b",
                                 "(none)",
                                 "1",
                                 'error: Unknown command "bogus". Type "help" for a list.',
                                 "error: get requires at least one key.",
                                 "error: set requires a key and a value.",
                                 'error: Wrong arguments for "find". Type "help" for usage.',
                                 "(none)",
                                 "RadixNode('test', 'aa')",
                                 "aa",
                                 "(1 found)"]


def test_shell_tree_commands(tmp_path) -> None:
    path = tmp_path / "keys.json"
    path.write_text(json.dumps({"ab": 1, "a": 2, "abd": 3, "b": 4}), encoding='utf-8')
    lines = _run_shell(f"load {path}",
                       "delete c",
                       "delete b",
                       "DELETE ab",
                       "print",
                       "check",
                       "load",
                       f"load {tmp_path / 'missing.json'}",
                       "exit")
    assert lines[:4] == [f"loaded 4 items from {path}", "ok", "ok", "ok"]
    assert lines[4:6] == ["'a'  value: 2", "\t'bd'  value: 3"]
    assert lines[6] == "ok"
    assert lines[7] == "error: load requires at least one file name."
    assert lines[8].startswith("error: ") and "missing.json" in lines[8]


def test_shell_help_and_empty() -> None:
    lines = _run_shell("help", "print")
    assert any(line.startswith("set KEY VALUE...") for line in lines)
    assert not any(line.startswith("exit") for line in lines)
    assert lines[-1] == "(empty)"


class _BrokenShell(TreeShell):

    def cmd_broken(self, key:str) -> None:
        """ broken KEY - fail inside the command body. """
        raise TypeError(f"internal failure on {key}")


def test_shell_argument_errors() -> None:
    """ Only a call that does not fit the command's signature counts as wrong arguments. """
    shell = _BrokenShell(RadixTree(), out=io.StringIO())
    for line in ["broken", "broken a b", "find", "find a b", "len extra"]:
        with pytest.raises(CommandError):
            shell.run_line(line)
    with pytest.raises(TypeError, match="internal failure on x"):
        shell.run_line("broken x")


def test_options() -> None:
    opts = RadixOptions("Test app.")
    assert opts.symbols == "text"
    assert opts.load == []
    opts.parse(["prog", "stray", "--symbols=bytes", "--load", "a.json", "b.json", "--verbose", "--workers=3"])
    assert opts.symbols == "bytes"
    assert opts.load == ["a.json", "b.json"]
    assert opts.verbose is True
    assert opts.workers == 3
    assert opts.extras() == ["stray"]
    assert opts.build_tree().symbols is BYTE_SYMBOLS
    opts.parse(["prog", "--verbose=no", "--unknown=1"])
    assert opts.verbose is False
    assert opts.extras() == ["--unknown=1"]
    with pytest.raises(ValueError):
        opts.parse(["prog", "--workers=many"])
    opts.parse(["prog", "--symbols=nibbles"])
    with pytest.raises(ValueError):
        opts.build_tree()
    with pytest.raises(AttributeError):
        opts.not_an_option
    assert "--symbols" in opts.format_help("prog")


def test_logger() -> None:
    buf = io.StringIO()
    logger = StreamLogger(buf, time_fmt=None)
    logger.log("one")
    logger.log("one")
    logger("two")
    assert buf.getvalue() == "one\n*\ntwo\n"


def test_logger_files(tmp_path) -> None:
    path = tmp_path / "status.log"
    logger = StreamLogger()
    logger.add_file(str(path))
    logger.log("started")
    logger.close()
    logger.log("not written")
    assert path.read_text(encoding='utf-8').endswith("]: started\n")


def test_mode_selection() -> None:
    modes = {"shell": None, "dump": None, "dust": None}
    assert match_modes("sh", modes) == ["shell"]
    assert match_modes("dump", modes) == ["dump"]
    assert match_modes("du", modes) == ["dump", "dust"]
    assert match_modes("x", modes) == []
    assert split_mode(["radix-trie", "dump", "--log="]) == ("dump", ["radix-trie dump", "--log="])
    assert split_mode(["radix-trie", "--log="]) == ("shell", ["radix-trie", "--log="])
    assert split_mode([]) == ("shell", [""])


def test_main_mode_errors(capsys) -> None:
    from radix_trie.__main__ import main
    assert main(["radix-trie", "nothing"]) == -1
    out = capsys.readouterr().out
    assert out.startswith('No mode named "nothing".')
    assert "dump" in out and "shell" in out


def test_main_selects_dump(tmp_path, capsys) -> None:
    from radix_trie.__main__ import main
    path = tmp_path / "keys.json"
    path.write_text(json.dumps({"k": 1}), encoding='utf-8')
    assert main(["radix-trie", "du", "--log=", f"--load={path}"]) == 0
    assert capsys.readouterr().out.splitlines() == ["'k'  value: 1", "1 items"]


def test_options_help(capsys) -> None:
    opts = RadixOptions("Test app.")
    with pytest.raises(SystemExit) as exc_info:
        opts.parse(["/usr/bin/prog", "--help"])
    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    assert out.startswith("Test app.\nusage: prog [-h] [--log=<str>]")
    assert "  --workers" in out


def test_benchmarks(capsys) -> None:
    from benchmarks.__main__ import main
    assert main(["bench", "find", "prefix", "--size=50", "--runs=1"]) == 0
    out = capsys.readouterr().out
    assert "find (raw, best of 1):" in out
    assert "prefix (raw, best of 1):" in out
    assert main(["bench", "sort"]) == -1
    assert main(["bench", "--profiler=fast"]) == -1


def test_main_dump(tmp_path, capsys) -> None:
    from radix_trie.main_dump import main
    path = tmp_path / "keys.json"
    path.write_text(json.dumps({"ðom": 1, "ðomum": 2, "ðomulus": 3}), encoding='utf-8')
    assert main(["radix-trie dump", "--log=", f"--load={path}"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["'ðom'  value: 1",
                   "\t'u'  -",
                   "\t\t'lus'  value: 3",
                   "\t\t'm'  value: 2",
                   "3 items"]


def test_main_shell(tmp_path, capsys, monkeypatch) -> None:
    from radix_trie.main_shell import main
    log_path = tmp_path / "shell.log"
    monkeypatch.setattr(sys, "stdin", io.StringIO("set a 1\nget a\n"))
    assert main(["radix-trie shell", f"--log={log_path}"]) == 0
    assert capsys.readouterr().out == "ok\na: 1\n"
    log_text = log_path.read_text(encoding='utf-8')
    assert "Shell started with 0 items." in log_text
    assert "Set 'a'." in log_text


def test_main_logs_exceptions(tmp_path) -> None:
    from radix_trie.main_dump import main
    log_path = tmp_path / "dump.log"
    with pytest.raises(KeyLoadError):
        main(["radix-trie dump", f"--log={log_path}", f"--load={tmp_path / 'missing.json'}"])
    assert "KeyLoadError" in log_path.read_text(encoding='utf-8')
