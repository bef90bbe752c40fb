# Copyright (c) 2026 curseshelper contributors
# SPDX-License-Identifier: ISC

"""
cursesscope -- acquire, run, always release

Terminal state (cursor visibility, the current attributes and color pair)
must be put back no matter how the code that changed it exits. scoped() and
scope() pair an acquire step with a release step that runs on every exit
path. Exceptions from the body are re-raised unchanged after the release.

Scopes nest, and unwind in the reverse order they were entered.
"""

from contextlib import contextmanager


def scoped(acquire, release, body):
    """
    Calls acquire(), then body(), then release(state), where 'state' is what
    acquire() returned. release() runs even if body() raises. Returns what
    body() returned.

    If acquire() raises, neither body() nor release() is called.
    """
    state = acquire()
    try:
        return body()
    finally:
        release(state)


@contextmanager
def scope(acquire, release):
    """
    Context manager version of scoped(). The 'as' target is the value
    returned by acquire().
    """
    state = acquire()
    try:
        yield state
    finally:
        release(state)
