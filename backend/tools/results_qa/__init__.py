"""
Result quality tools for operators.

Usage:
    python -m tools.results_qa.cli validate <results_file>
    python -m tools.results_qa.cli reconcile <file_a> <file_b>
"""
