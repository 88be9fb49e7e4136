"""
Lazy Import Utilities for Heavy Dependencies.

PyMuPDF and google-generativeai are only needed by the code paths that
actually open a PDF or call the model. Importing them at use time keeps
`regref --help`, config loading and the pure extraction/resolution layers
importable (and testable) without either package.

    class GeminiClient:
        @lazy_property
        def client(self):
            import google.generativeai as genai  # Only fails if actually used
            return genai.GenerativeModel(self.model)
"""

from functools import wraps
from typing import Any, Callable, cast


def lazy_property(import_func: Callable[..., Any]) -> Any:
    """Decorator for lazy-loaded, per-instance cached properties.

    The decorated function should import and initialize the dependency.
    The result is stored on the instance as ``_<name>_cached``; tests can
    set that attribute to inject a fake.

    Examples:
        >>> class MyService:
        ...     @lazy_property
        ...     def client(self):
        ...         from expensive_library import ExpensiveClient
        ...         return ExpensiveClient()
        ...
        >>> service = MyService()
        >>> client = service.client  # Now it loads
        >>> assert client is service.client
    """
    attr_name = f"_{import_func.__name__}_cached"

    @wraps(import_func)
    def wrapper(self: Any) -> Any:
        if not hasattr(self, attr_name):
            setattr(self, attr_name, import_func(self))
        return getattr(self, attr_name)

    return cast(Any, property(wrapper))
