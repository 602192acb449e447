import enum


class ErrorKind(enum.Enum):
    """ Messages carried by Error values produced while reading or evaluating"""
    DIV_ZERO = "Division By Zero"
    BAD_OP = "Cannot operator on non number!"
    BAD_NUM = "invalid number"
    NOT_SYMBOL = "S-expression Does not start with symbol"
    UNKNOWN_OP = "unknown operator"
    OVERFLOW = "Integer Overflow"


class LispyError(Exception):
    """ Base class for all Lispy errors"""
    pass

class LispyContractError(LispyError):
    """ Raised when a Value operation is called with arguments violating its contract"""
    pass

class LispyIndexError(LispyContractError, IndexError):
    """ Raised when a child index is outside a container"""

class LispyConfigError(LispyError):
    """ Raised when a configuration value cannot be interpreted"""

class LispySyntaxError(LispyError):
    """ Raised when the parser rejects its input"""

    def __init__(self, message: str, line: int = 1, col: int = 1, filename: str = "<stdin>"):
        super().__init__(message)
        self.message = message
        self.line = line
        self.col = col
        self.filename = filename

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.col}: error: {self.message}"
