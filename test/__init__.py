""" Test package for radix_trie. __init__.py loads common test resources. """

import json
import os

_DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


def get_test_filename(name:str) -> str:
    return os.path.join(_DATA_DIR, name + ".json")


with open(get_test_filename("words"), encoding='utf-8') as fp:
    TEST_WORDS = json.load(fp)
