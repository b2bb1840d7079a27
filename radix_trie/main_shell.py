""" Main module for the interactive command shell. """

import sys

from .options import RadixOptions
from .shell import TreeShell


def main(argv=None) -> int:
    """ Build a tree from command-line options, load any files, and run commands from standard input. """
    opts = RadixOptions("Run commands on a radix tree from standard input. Type 'help' once inside for a list.")
    opts.parse(argv)
    logger = opts.build_logger()
    log_exception = opts.exception_logger(logger)
    try:
        tree = opts.build_tree()
        opts.load_files(tree, logger)
        logger.log(f"Shell started with {len(tree)} items.")
        shell = TreeShell(tree, opts.build_search(tree), log=logger.log)
        prompt = opts.prompt if sys.stdin.isatty() else ""
        return shell.run(sys.stdin, prompt)
    except Exception as e:
        log_exception.log_current(e)
        raise
    finally:
        logger.close()


if __name__ == '__main__':
    sys.exit(main())
