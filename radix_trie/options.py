from .load import JSONKeyLoader
from .parallel import ParallelSearch
from .prefix import get_symbols
from .tree import RadixTree
from .util.cmdline import CmdlineOptions
from .util.exception import ExceptionLogger
from .util.log import open_logger, StreamLogger


class RadixOptions(CmdlineOptions):
    """ Contains all command-line options necessary to build a tree and its supporting objects. """

    def __init__(self, app_description="Running radix_trie as a library (should never be seen).") -> None:
        super().__init__(app_description)
        self.add("log", "status.log",
                 "Text file to log status and exceptions. Leave blank to log nowhere.")
        self.add("verbose", False,
                 "Also write log messages to standard error.")
        self.add("symbols", "text",
                 "Symbol set for keys: 'text' (Unicode code points) or 'bytes' (raw UTF-8 bytes).")
        self.add("load", [],
                 "JSON files of key/value objects to load on start.")
        self.add("workers", 0,
                 "Number of threads for parallel search (0 = one per CPU core).")
        self.add("prompt", "> ",
                 "Prompt string for the interactive shell.")

    def build_logger(self) -> StreamLogger:
        return open_logger(self.log, to_stderr=self.verbose)

    def build_tree(self) -> RadixTree:
        """ Make an empty tree with the chosen symbol set. Raise ValueError if there is no such set. """
        symbols = get_symbols(self.symbols)
        return RadixTree(symbols=symbols)

    def build_search(self, tree:RadixTree) -> ParallelSearch:
        return ParallelSearch(tree, workers=self.workers)

    def load_files(self, tree:RadixTree, logger:StreamLogger) -> None:
        """ Load every file given on the command line into <tree>, logging how much came from each. """
        loader = JSONKeyLoader()
        for filename in self.load:
            count = loader.load_into(filename, tree)
            logger.log(f"Loaded {count} items from {filename}.")

    @staticmethod
    def exception_logger(logger:StreamLogger) -> ExceptionLogger:
        return ExceptionLogger(logger.log)
