'''
    Errors raised while turning GVF lines into RDF

    FormatError and ValidationError cost a single record,
    MappingError and ConversionError end the run.
'''


class DbVarRDFError(Exception):
    pass


class FormatError(DbVarRDFError, ValueError):
    """
    A GVF line (or one of its attributes) does not follow the format
    """


class ValidationError(DbVarRDFError, ValueError):
    """
    A variant is missing one or more of its required fields
    """

    def __init__(self, missing):
        self.missing = tuple(missing)
        super().__init__(
            "missing required field(s): {}".format(', '.join(self.missing)))


class MappingError(DbVarRDFError, LookupError):
    """
    A lookup table can not give a single answer for a key
    """


class ConversionError(DbVarRDFError):
    """
    Unexpected failure while converting the record at `line_num`
    """

    def __init__(self, line_num, message):
        self.line_num = line_num
        super().__init__("{} at line {}".format(message, line_num))
