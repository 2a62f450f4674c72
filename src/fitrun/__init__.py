"""fitrun - terminal client for route executions and activity scoring."""

__version__ = "0.1.0"
