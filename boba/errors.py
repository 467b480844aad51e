from typing import Optional

from boba.cache import Location


class BobaError(Exception):
    """Base class for every error the Boba toolchain reports.

    Each error carries the location it refers to, a stable diagnostic
    code and a short title; `SourceCache.render` turns these into a
    readable report.
    """
    code = 'E-000'
    title = 'Error'

    def __init__(self, message: str, location: Optional[Location]):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self) -> str:
        return f"{self.title}: {self.message}"


###############################################################################
# Parse errors
###############################################################################


class ParseError(BobaError):
    """Raised when source text does not form a valid program."""


class UnexpectedEnd(ParseError):
    code = 'C-001'
    title = 'Unexpected End of Input'

    def __init__(self, expected: str, location: Location):
        super().__init__(f"expected {expected}, found end of input", location)
        self.expected = expected


class InvalidToken(ParseError):
    code = 'C-002'
    title = 'Invalid Token'

    def __init__(self, part: str, location: Location):
        super().__init__(f"invalid token {part}", location)
        self.part = part


class UnclosedString(ParseError):
    code = 'C-003'
    title = 'Unclosed String'

    def __init__(self, location: Location):
        super().__init__('string has no closing quote', location)


class InvalidNumber(ParseError):
    code = 'C-004'
    title = 'Invalid Number'

    def __init__(self, error: Exception, location: Location):
        super().__init__(f"error parsing number: {error}", location)
        self.error = error


class UnexpectedToken(ParseError):
    code = 'C-006'
    title = 'Unexpected Token'

    def __init__(self, expected: str, found: str, location: Location):
        super().__init__(f"expected {expected}, found {found}", location)
        self.expected = expected
        self.found = found


class UnclosedBrace(ParseError):
    code = 'C-007'
    title = 'Unclosed Brace'

    def __init__(self, location: Location):
        super().__init__('opening brace has no closing brace', location)


class InvalidAssignment(ParseError):
    code = 'C-008'
    title = 'Invalid Assignment'

    def __init__(self, location: Location):
        super().__init__('cannot assign expression to another expression', location)


class MixedTabsAndSpaces(ParseError):
    code = 'C-009'
    title = 'Mixed Tabs and Spaces'

    def __init__(self, tab: bool, location: Location):
        if tab:
            message = 'tab found here when a space was expected'
        else:
            message = 'space found here when a tab was expected'
        super().__init__(message, location)
        self.tab = tab


###############################################################################
# Run errors
###############################################################################


class RunError(BobaError):
    """Raised when evaluating a well-formed program fails."""


class UnknownFunction(RunError):
    code = 'R-001'
    title = 'Unknown Function'

    def __init__(self, ident: str, location: Location):
        super().__init__(f"no function named '{ident}' is in scope", location)
        self.ident = ident


class UnknownVariable(RunError):
    code = 'R-002'
    title = 'Unknown Variable'

    def __init__(self, ident: str, location: Location):
        super().__init__(f"no variable named '{ident}' is in scope", location)
        self.ident = ident


class ParameterCount(RunError):
    code = 'R-003'
    title = 'Parameter Count'

    def __init__(self, expected: int, found: int, location: Location):
        super().__init__(f"expected at most {expected} arguments, found {found}", location)
        self.expected = expected
        self.found = found


class NativeCallError(RunError):
    code = 'R-004'
    title = 'Native Call Error'


class TypeMismatch(RunError):
    code = 'R-005'
    title = 'Type Mismatch'

    def __init__(self, expected: str, found: str, location: Location):
        super().__init__(f"expected '{expected}', found '{found}'", location)
        self.expected = expected
        self.found = found


class InvalidUnary(RunError):
    code = 'R-006'
    title = 'Invalid Unary Operation'

    def __init__(self, op, vtype: str, location: Location):
        super().__init__(f"operator '{op}' is not defined for '{vtype}'", location)
        self.op = op
        self.vtype = vtype


class InvalidBinary(RunError):
    code = 'R-007'
    title = 'Invalid Binary Operation'

    def __init__(self, op, vtype1: str, vtype2: str, location: Location):
        super().__init__(f"operator '{op}' is not defined for '{vtype1}' and '{vtype2}'", location)
        self.op = op
        self.vtype1 = vtype1
        self.vtype2 = vtype2


class MathError(RunError):
    code = 'R-008'
    title = 'Math Error'


class NativeError(Exception):
    """Raised by native callbacks; the engine reports it as `NativeCallError`."""
