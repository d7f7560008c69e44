"""Tests for the per-application hit counter."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest
from flask import Flask

from chirpy.core import metrics


def test_counter_increments_and_resets():
    counter = metrics.HitCounter()
    assert counter.increment() == 1
    assert counter.increment() == 2
    counter.reset()
    assert counter.value == 0


def test_counter_is_thread_safe():
    counter = metrics.HitCounter()
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: counter.increment(), range(1000)))
    assert counter.value == 1000


def test_each_app_owns_its_counter(app):
    other = Flask("other")
    metrics.init_app(other)

    with other.app_context():
        metrics.get_hit_counter().increment()
        assert metrics.get_hit_counter().value == 1

    assert app.extensions[metrics.EXTENSION_KEY] is not other.extensions[metrics.EXTENSION_KEY]


def test_uninitialized_app_raises():
    bare = Flask("bare")
    with bare.app_context(), pytest.raises(RuntimeError):
        metrics.get_hit_counter()
