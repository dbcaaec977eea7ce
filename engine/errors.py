"""
errors.py — Error taxonomy
===========================
    InvalidSelection    – operation requested with no (or an unknown) algorithm
    GenerationFailure   – the execution backend rejected or failed a request
    StructuralViolation – a generator produced a malformed sequence (a defect)

Session catches AlgoVizError at its boundary; nothing here is fatal.
"""


class AlgoVizError(Exception):
    """Base class for every error the visualizer reports."""


class InvalidSelection(AlgoVizError):
    pass


class GenerationFailure(AlgoVizError):
    pass


class StructuralViolation(AlgoVizError):
    pass
