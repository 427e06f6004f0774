from .terminal import TerminalPrinter

__all__ = ["TerminalPrinter"]
