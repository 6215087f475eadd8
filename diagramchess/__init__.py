"""Chess position model, opening book, UCI engine client, gestures and board geometry."""

__version__ = "0.1.4"