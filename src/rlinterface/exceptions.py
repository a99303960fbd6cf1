"""
Defines the exceptions raised by `rlinterface`. Errors raised by a bound
model are never wrapped; they propagate to the caller as they are.
"""



class RLInterfaceError(Exception):
    """
    Base class for all errors raised by `rlinterface` itself.
    """



class IncompatibleModelError(RLInterfaceError, TypeError):
    """
    Raised when an environment is bound to a model that lacks a required
    capability, or to a model of the wrong variant (MDP vs POMDP).
    """



class ProtocolError(RLInterfaceError, ValueError):
    """
    Raised when a request message cannot be decoded: invalid JSON, unknown
    command, or a missing/ill-formed payload.
    """



class RemoteError(RLInterfaceError):
    """
    Raised by `RemoteEnvironment` when the server answers with an error reply.

    Args:
    * message: The error message sent by the server.
    * command: The command that failed.
    """

    def __init__(self, message: str, command: str=None):
        super().__init__(message)
        self.message = message
        self.command = command
