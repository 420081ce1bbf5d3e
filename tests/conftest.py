import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from poem_prosody.core.cmudict_loader import CMUDictLoader


MINI_CMUDICT = """\
;;; small pronouncing dictionary used by the test-suite
A  AH0
ABOUT  AH0 B AW1 T
AWAY  AH0 W EY1
BAT  B AE1 T
BIT  B IH1 T
BRIGHT  B R AY1 T
CAT  K AE1 T
DAY  D EY1
DOG  D AO1 G
FOG  F AO1 G
HAT  HH AE1 T
HELLO  HH AH0 L OW1
IS  IH1 Z
LIGHT  L AY1 T
LOG  L AO1 G
LORD  L AO1 R D
MINE  M AY1 N
NIGHT  N AY1 T
RECORD  R EH1 K ER0 D
RECORD(1)  R IH0 K AO1 R D
SUN  S AH1 N
THE  DH AH0
TIME  T AY1 M
TODAY  T AH0 D EY1
"""


def write_dictionary(path: Path, content: str = MINI_CMUDICT) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def dictionary_path(tmp_path):
    """Path to a freshly written miniature CMU dictionary."""

    return write_dictionary(tmp_path / "cmudict.dict")


@pytest.fixture
def mini_loader(dictionary_path):
    """Loader backed by the miniature dictionary instead of the bundled one."""

    return CMUDictLoader(dict_path=dictionary_path)
