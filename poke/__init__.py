"""poke: browse and send the requests of a .http file from the terminal."""

from .app import PokeApp
from .errors import ExecutionError, LoadError, PokeError
from .execution import ExecutionController, ExecutionOutcome
from .http_client import HttpExecutor
from .models import (
    Document,
    ExecutionRecord,
    ExecutionStatus,
    HttpResponse,
    Method,
    ParseDiagnostic,
    Request,
)
from .parsing import parse, parse_file
from .state import Action, Focus, UIState, handle_key
from .store import RequestStore, load_store
from .variables import resolve, substitute

__all__ = [
    "PokeApp",
    "PokeError",
    "LoadError",
    "ExecutionError",
    "ExecutionController",
    "ExecutionOutcome",
    "HttpExecutor",
    "Document",
    "ExecutionRecord",
    "ExecutionStatus",
    "HttpResponse",
    "Method",
    "ParseDiagnostic",
    "Request",
    "parse",
    "parse_file",
    "resolve",
    "substitute",
    "RequestStore",
    "load_store",
    "Action",
    "Focus",
    "UIState",
    "handle_key",
]

__version__ = "0.1.0"
