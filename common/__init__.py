"""
Helpers shared by the command-line tools: process execution, logging setup
and database file handling.
"""
