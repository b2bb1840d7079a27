""" Main module for printing the structure of a tree loaded from files. """

import sys

from .format import print_tree
from .options import RadixOptions


def main(argv=None) -> int:
    """ Load every file given with --load into one tree, then draw it and show how many items it holds. """
    opts = RadixOptions("Load JSON key files into a radix tree and print its structure.")
    opts.parse(argv)
    logger = opts.build_logger()
    log_exception = opts.exception_logger(logger)
    try:
        tree = opts.build_tree()
        opts.load_files(tree, logger)
        tree.validate()
        print_tree(tree)
        print(f"{len(tree)} items")
        return 0
    except Exception as e:
        log_exception.log_current(e)
        raise
    finally:
        logger.close()


if __name__ == '__main__':
    sys.exit(main())
