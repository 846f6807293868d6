class TableauException(Exception):
    """Base exception for all errors raised by the Tableau client"""
