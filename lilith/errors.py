class LilithError(Exception):
    """ Base class for all Lilith host-level errors"""
    pass

class LilithInvalidSymbol(LilithError):
    """ Raised when host code binds a key that is not a Symbol"""
    pass

class LilithSyntaxError(LilithError):
    """ Raised when the reader cannot turn source text into values"""

class LilithInitError(LilithError):
    """ Raised when the bootstrap library evaluates to an Error"""

# Language-level failures never raise: builtins and the evaluator return
# lilith.types.error_value.Error values instead. These exceptions only cross
# the boundary with host code (reader, bootstrap, registration).
