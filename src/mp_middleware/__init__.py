"""
mp_middleware – embeddable engine for ordered, asynchronous middleware chains.

Import path convention::

    from mp_middleware import MiddlewareEngine
    from mp_middleware.config import EngineSettings
    from mp_middleware.kernel.errors import UnconfiguredHandlerError
    from mp_middleware.kernel.types import Break, Continue, Fail
"""

from mp_middleware.application.engine import MiddlewareEngine
from mp_middleware.config import EngineSettings

__version__ = "0.1.0"
__all__ = ["EngineSettings", "MiddlewareEngine", "__version__"]
