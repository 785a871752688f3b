class WriteError(Exception):
    pass


class OptionError(WriteError):
    pass


class UnsupportedTypeError(WriteError, TypeError):
    pass


class UnmappableTypeError(WriteError, TypeError):
    pass


class CompressionError(WriteError):
    pass


class DecodeError(CompressionError):
    pass
