"""Tools used by the inspection pipeline."""

from .browser_tool import BrowserSession, open_browser
from .input_tool import load_work_items
from .auth_tool import authenticate
from .classify_tool import classify_page, disposition_for, next_state_for
from .extract_tool import extract_fields, fold_groups
from .storage_tool import ResultSink, dump_json, dump_csv, export_excel

__all__ = [
    "BrowserSession",
    "open_browser",
    "load_work_items",
    "authenticate",
    "classify_page",
    "disposition_for",
    "next_state_for",
    "extract_fields",
    "fold_groups",
    "ResultSink",
    "dump_json",
    "dump_csv",
    "export_excel",
]
