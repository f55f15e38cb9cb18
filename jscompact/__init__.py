"""jscompact package.

Compacts JavaScript by compiling options into an ordered pipeline of UglifyJS stages.
The session module is imported lazily so that importing the package does not build
loggers or touch the embedded engine during test collection.
"""

__all__ = ["compile", "new", "Minifier", "Error", "EngineExecutionError", "resolve", "DEFAULTS"]


def __getattr__(name):
    if name in ("compile", "new", "Minifier"):
        from jscompact import minifier
        return getattr(minifier, name)
    if name in ("Error", "EngineExecutionError"):
        from jscompact.engine import EngineExecutionError
        return EngineExecutionError
    if name in ("resolve", "DEFAULTS"):
        from jscompact import config
        return getattr(config, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
