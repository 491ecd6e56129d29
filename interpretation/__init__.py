"""
Interpretation Package.

Optional narrative analysis of completed scans.
"""

from interpretation.interpreter import (
    Interpreter,
    InterpreterConfig,
    extract_message_content,
)
from interpretation.prompts import (
    FINANCIAL_SYSTEM_PROMPT,
    SCAN_SYSTEM_PROMPT,
    format_financial_data_for_ai,
    format_scan_result_for_ai,
)


__all__ = [
    "Interpreter",
    "InterpreterConfig",
    "extract_message_content",
    "SCAN_SYSTEM_PROMPT",
    "FINANCIAL_SYSTEM_PROMPT",
    "format_scan_result_for_ai",
    "format_financial_data_for_ai",
]
