# logger.py

import os, sys, logging
from typing import Optional
from functools import partial

class Logger:
    """
    Thin wrapper around the standard logging module.

    Logging is silent unless enabled; when enabled, records go to ``log_file``
    (``"-"`` for stdout) or to ``logs/typemorph_debug.log`` under the project root.
    Constructing a Logger replaces whatever handlers an earlier Logger of the
    same name installed, so the most recent configuration always applies.
    """
    def __init__(self, name: str, logging_enabled: bool = False,
                 log_file: Optional[str] = None):
        self._logger = logging.getLogger(name)
        self.logging_enabled = logging_enabled
        self._clear_handlers()
        if logging_enabled:
            self._logger.setLevel(logging.DEBUG)
            self._logger.addHandler(self._build_handler(log_file))
        else:
            self._logger.setLevel(logging.NOTSET)
            self._logger.addHandler(logging.NullHandler())

        # Dynamically create logging methods
        for level in ['debug', 'info', 'warning', 'error']:
            setattr(self, level, partial(self._log, level))

    @staticmethod
    def _build_handler(log_file: Optional[str]) -> logging.Handler:
        if log_file == "-":
            handler = logging.StreamHandler(sys.stdout)
        else:
            if not log_file:
                project_root = os.path.dirname(os.path.dirname(__file__))
                os.makedirs(os.path.join(project_root, 'logs'), exist_ok=True)
                log_file = os.path.join(project_root, 'logs', 'typemorph_debug.log')
            handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        return handler

    def close(self) -> None:
        """Close the configured handlers and fall back to a NullHandler."""
        self._clear_handlers()
        self._logger.addHandler(logging.NullHandler())

    def _clear_handlers(self) -> None:
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

    def _log(self, level: str, msg: str, exc_info: Optional[bool] = None) -> None:
        getattr(self._logger, level)(f"TypeMorph: {msg}", exc_info=exc_info)
