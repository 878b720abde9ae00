"""Helper functions for caching results to disk

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

import functools
import os
import sys
from collections.abc import Callable, Hashable
from typing import Any

import diskcache
import platformdirs

CACHE_APP_NAME = "modgroup"


def get_cache_dir(cache_dir: str | None = None) -> str:
    """Directory in which to store disk caches."""
    return cache_dir or platformdirs.user_cache_dir(CACHE_APP_NAME)


def get_disk_cache(cache_name: str, *, cache_dir: str | None = None) -> diskcache.Cache:
    """Retrieve a dictionary-like cache object.

    Caching is disabled while running tests, in which case the cache is a fresh dictionary.
    """
    if running_with_pytest():
        return {}
    return diskcache.Cache(os.path.join(get_cache_dir(cache_dir), cache_name))


def use_disk_cache(
    cache_name: str,
    *,
    cache_dir: str | None = None,
    key_func: Callable[..., Hashable] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to cache the outputs of a function to disk.

    By default, results are keyed by the positional and keyword arguments of the function, which
    must therefore be hashable.  Functions whose arguments are not suitable keys should provide a
    key_func that maps the arguments to a hashable key.
    """

    def decorator(function: Callable[..., Any]) -> Callable[..., Any]:
        if running_with_pytest():
            return function

        @functools.wraps(function)
        def function_with_cache(*args: Any, **kwargs: Any) -> Any:
            cache = get_disk_cache(cache_name, cache_dir=cache_dir)
            if key_func is not None:
                key = key_func(*args, **kwargs)
            else:
                key = args + tuple(sorted(kwargs.items()))
            if key in cache:
                return cache[key]

            result = function(*args, **kwargs)
            cache[key] = result
            return result

        return function_with_cache

    return decorator


def running_with_pytest() -> bool:
    """Are we currently running with pytest?"""
    return "pytest" in sys.modules
