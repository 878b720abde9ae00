"""Unit tests for cache.py

Copyright 2024 The modgroup Authors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from __future__ import annotations

import os
import unittest.mock

import modgroup.cache


def test_pytest() -> None:
    """We are running with pytest, so nothing gets cached."""
    assert modgroup.cache.running_with_pytest()

    def test_func() -> None: ...

    assert modgroup.cache.use_disk_cache("test")(test_func) is test_func
    assert modgroup.cache.get_disk_cache("test") == {}


def test_cache_dir() -> None:
    """Choose where to store caches."""
    assert modgroup.cache.get_cache_dir("custom_dir") == "custom_dir"
    with unittest.mock.patch("platformdirs.user_cache_dir", return_value="user_dir") as mock_dir:
        assert modgroup.cache.get_cache_dir() == "user_dir"
    mock_dir.assert_called_once_with(modgroup.cache.CACHE_APP_NAME)

    with (
        unittest.mock.patch("modgroup.cache.running_with_pytest", return_value=False),
        unittest.mock.patch("diskcache.Cache", return_value={}) as mock_cache,
    ):
        modgroup.cache.get_disk_cache("test_name", cache_dir="custom_dir")
    mock_cache.assert_called_once_with(os.path.join("custom_dir", "test_name"))


def test_use_disk_cache() -> None:
    """Cache function outputs."""
    cache: dict[object, int] = {}
    with (
        unittest.mock.patch("modgroup.cache.running_with_pytest", return_value=False),
        unittest.mock.patch("diskcache.Cache", return_value=cache),
    ):
        calls = []

        @modgroup.cache.use_disk_cache("test_name")
        def get_five(arg: str, *, power: int = 1) -> int:
            calls.append(arg)
            return 5**power

        # save results to the cache, and retrieve them without calling the function again
        assert get_five("test_arg") == 5
        assert cache == {("test_arg",): 5}
        assert get_five("test_arg") == 5
        assert calls == ["test_arg"]

        # keyword arguments are part of the key
        assert get_five("test_arg", power=2) == 25
        assert cache[("test_arg", ("power", 2))] == 25

        @modgroup.cache.use_disk_cache("test_name", key_func=lambda words: tuple(map(str, words)))
        def get_six(words: list[int]) -> int:
            return 6

        assert get_six([1, 2]) == 6
        assert cache[("1", "2")] == 6
