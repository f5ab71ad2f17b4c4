"""junkyard - vehicle inventory tracker."""

__version__ = "0.1.0"
