"""Response-template classification.

Every ``(request_path, template)`` pair from the command line is turned
into a ``Binding`` by running an ordered chain of classifiers; the first
one that recognizes the template wins:

1. **status** — the template is a base-10 integer (``"200"``, ``"404"``).
2. **directory** — the template names an existing directory on disk.
3. **file** — anything else is treated as a file path. The file does not
   need to exist yet; a missing file is a 404 at request time.

The chain is data (``CLASSIFIERS``): adding a response kind means adding
a ``Kind`` member and one function to the tuple.

Integers are checked first, so a directory literally called ``500`` is
still a status binding.
"""

import os
import re
import stat
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

_INTEGER = re.compile(r"[+-]?[0-9]+")


class Kind(Enum):
    """What a binding responds with."""

    STATUS = "status"
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class Binding:
    """A classified ``(request_path, kind, payload)`` triple.

    ``payload`` is the status code for ``Kind.STATUS`` and a filesystem
    path for ``Kind.DIRECTORY`` and ``Kind.FILE``.
    """

    request_path: str
    kind: Kind
    payload: int | str


type Classifier = Callable[[str, str], Binding | None]


def classify_status(request_path: str, template: str) -> Binding | None:
    """Bind a status code. No range check: the code is sent as given."""
    if _INTEGER.fullmatch(template) is None:
        return None
    return Binding(request_path, Kind.STATUS, int(template))


def classify_directory(request_path: str, template: str) -> Binding | None:
    """Bind an existing directory, served under ``request_path/``.

    Any stat failure (missing entry, permission denied, invalid name)
    means "not a directory" and leaves the template to the next classifier.
    """
    try:
        info = os.stat(template)
    except (OSError, ValueError):
        return None
    if not stat.S_ISDIR(info.st_mode):
        return None
    if not request_path.endswith("/"):
        request_path += "/"
    return Binding(request_path, Kind.DIRECTORY, template)


def classify_file(request_path: str, template: str) -> Binding:
    """Bind a file path. Always succeeds; existence is checked per request."""
    return Binding(request_path, Kind.FILE, template)


CLASSIFIERS: tuple[Classifier, ...] = (
    classify_status,
    classify_directory,
    classify_file,
)


def classify(request_path: str, template: str) -> Binding:
    """Classify one response template.

    Total: ``classify_file`` accepts everything, so a binding is always
    produced.
    """
    for classifier in CLASSIFIERS:
        binding = classifier(request_path, template)
        if binding is not None:
            return binding
    msg = f"No classifier accepted template {template!r}"
    raise AssertionError(msg)


def classify_all(pairs: Iterable[tuple[str, str]]) -> list[Binding]:
    """Classify ``(request_path, template)`` pairs, preserving order."""
    return [classify(path, template) for path, template in pairs]
