from typing import Optional


class ParseError(Exception):
    """
    Base class for everything that can stop a parse.

    The fields of an error are its `args`, so errors survive `copy` and
    `pickle`. `str()` of any subclass is a single human readable line,
    printing it is left to the caller.
    """

    name: Optional[str]

    def __init__(self, name: Optional[str], *fields: str):
        super().__init__(name, *fields)
        self.name = name

    def render(self) -> str:
        raise NotImplementedError()

    def __str__(self) -> str:
        return self.render()


class UnknownOption(ParseError):
    def __init__(self, name: str):
        super().__init__(name)

    def render(self) -> str:
        return f"Invalid option: {self.name}"


class InvalidValue(ParseError):
    message: str

    def __init__(self, name: str, message: str):
        super().__init__(name, message)
        self.message = message

    def render(self) -> str:
        return f"Invalid value for {self.name}: {self.message}"


class MissingValue(ParseError):
    def __init__(self, name: str):
        super().__init__(name)

    def render(self) -> str:
        return f"Missing parameter for {self.name}"


class UnexpectedValue(ParseError):
    value: str

    def __init__(self, name: str, value: str):
        super().__init__(name, value)
        self.value = value

    def render(self) -> str:
        return f"Unexpected parameter for {self.name}: {self.value}"


class ProtocolViolation(ParseError):
    """
    The callback asked for a value while a value was already being resolved.

    This is a bug in the callback, not in the user's input. `name` is the
    option whose value was being resolved.
    """

    def __init__(self, name: Optional[str] = None):
        super().__init__(name)

    def render(self) -> str:
        return "Handler returned an invalid parse hint"
