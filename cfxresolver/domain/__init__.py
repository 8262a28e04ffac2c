"""Pure domain pieces: token extraction, endpoints, result models, errors.

Nothing here performs I/O, so the CLI, the HTTP app and the tests can all
share it.
"""
__all__ = ["endpoints", "errors", "models", "tokens"]
