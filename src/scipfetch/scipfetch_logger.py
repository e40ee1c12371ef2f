"""
Multi-purpose logger for scipfetch. Every line is emitted as a JSON record through the stdlib logger.
"""

import inspect
import logging
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class LogLine(BaseModel):
    """
    Represents a line in the scipfetch log
    """

    time: str
    level: str
    caller_file: str
    caller_name: str
    caller_line: int
    message: str


class ScipFetchLogger:
    """
    Logger class
    """

    def __init__(self, name: str = "scipfetch", level: Optional[int] = None) -> None:
        """
        Wraps the named stdlib logger. Its level is only changed when level is given.
        """
        self.logger = logging.getLogger(name)
        if level is not None:
            self.logger.setLevel(level)

    def log(self, debug_message: str, level: int) -> None:
        """
        Log the message at the given level, tagged with the file, function and line of the caller
        """
        debug_message = debug_message.replace("'", '"').replace("\n", " ")

        curframe = inspect.currentframe()
        calframe = inspect.getouterframes(curframe, 2)

        caller_file = calframe[1][1].replace("\\", "/").split("/")[-1]
        caller_line = calframe[1][2]
        caller_name = calframe[1][3]

        log_line = LogLine(
            time=str(datetime.now()),
            level=logging.getLevelName(level),
            caller_file=caller_file,
            caller_name=caller_name,
            caller_line=caller_line,
            message=debug_message,
        )

        self.logger.log(level=level, msg=log_line.model_dump_json())
