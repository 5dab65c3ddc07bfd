from contextlib import contextmanager
from typing import Any, Iterator

from pynvim_pp.logging import log
from std2.locale import si_prefixed_smol
from std2.timeit import timeit as _timeit

from ..consts import DEBUG


@contextmanager
def timeit(name: str, *args: Any) -> Iterator[None]:
    if not DEBUG:
        yield None
    else:
        with _timeit() as t:
            yield None
        delta = t().total_seconds()
        time = f"{si_prefixed_smol(delta, precision=0)}s"
        msg = f"TIME -- {name.ljust(30)} :: {time.ljust(8)} {' '.join(map(str, args))}"
        log.debug("%s", msg)
