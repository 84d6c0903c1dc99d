"""Terminal UI utilities — context-managed spinner."""

from __future__ import annotations

import contextlib
from collections.abc import Callable, Iterator

from loading.core.models import LoadingConfig
from loading.services.controller import Loading


@contextlib.contextmanager
def spinner(
    text: str = "",
    *,
    config: LoadingConfig | None = None,
    done: str | None = None,
) -> Iterator[Callable[[str], None]]:
    """Yield a callable that updates an inline spinner with status text.

    The line ends as a success (*done*, or the last text) when the block
    returns, and as a failure naming the exception when it raises.
    """
    loading = Loading(config, text=text)
    last = text

    def _update(msg: str) -> None:
        nonlocal last
        last = msg
        loading.text(msg)

    try:
        yield _update
    except BaseException as exc:
        detail = str(exc)
        loading.fail(f"{last}: {detail}" if last and detail else (detail or last or "Failed"))
        raise
    else:
        loading.success(done if done is not None else last)
    finally:
        loading.end()
