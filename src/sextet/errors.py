"""
Exceptions raised by the sextet package.

End of data is never an exception: readers return END_OF_DATA (-1) or a short count instead.
Failures of the underlying byte source are not wrapped and reach the caller as they were raised.
"""
import io

class ConfigurationError(ValueError):pass
class UseAfterClose(ValueError):pass
class UnsupportedOperation(io.UnsupportedOperation):pass
