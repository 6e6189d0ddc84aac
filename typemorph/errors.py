# errors.py

class TypeMorphError(Exception):
    """Base class for every error raised by typemorph."""


class ConfigurationError(TypeMorphError, ValueError):
    """An option has an invalid value or an unknown name."""


class LifecycleError(TypeMorphError, RuntimeError):
    """An operation was invoked on a destroyed session."""


class ContentError(TypeMorphError, ValueError):
    """The text or the target of an operation cannot be resolved."""


class CallbackError(TypeMorphError):
    """
    A lifecycle callback raised.

    Only ever logged; the engine never lets it propagate.
    """
    def __init__(self, callback_name: str, original: BaseException):
        super().__init__(f"{callback_name} callback failed: {original!r}")
        self.callback_name = callback_name
        self.original = original
