"""Engine components orchestrating fetch → parse → expand → download."""

from .cache import CacheStore
from .executor import TaskExecutor
from .fetcher import FetchResponse, Fetcher
from .media import MediaTool
from .parser import CourseParser
from .pipeline import filter_successful, flatten_results, successful_values
from .results import Failure, Success, TaskResult
from .thread_pool import ThreadPoolManager

__all__ = [
    "CacheStore",
    "CourseParser",
    "Failure",
    "FetchResponse",
    "Fetcher",
    "MediaTool",
    "Success",
    "TaskExecutor",
    "TaskResult",
    "ThreadPoolManager",
    "filter_successful",
    "flatten_results",
    "successful_values",
]
