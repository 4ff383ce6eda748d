# kdknn/errors.py
class KNNError(Exception):
    """Base for every recoverable kdknn failure. `status` names the condition."""
    status = "Error"
    message = "Unspecified error"

    def __init__(self, message=None):
        super().__init__(message or self.message)

    def __str__(self):
        return f"{self.status}: {self.args[0]}"


class NoBuffer(KNNError):
    status = "NoBuffer"
    message = "Buffer not found"

class InvalidBuffer(KNNError):
    status = "InvalidBuffer"
    message = "Buffer is not a one dimensional array of numbers"

class EmptyBuffer(KNNError):
    status = "EmptyBuffer"
    message = "Buffer is empty"

class WrongPointSize(KNNError):
    status = "WrongPointSize"
    message = "Wrong point size"

class DuplicateLabel(KNNError):
    status = "DuplicateLabel"
    message = "Label already in dataset"

class PointNotFound(KNNError):
    status = "PointNotFound"
    message = "Point not found"

class NoDataSet(KNNError):
    status = "NoDataSet"
    message = "DataSet not found"

class EmptyDataSet(KNNError):
    status = "EmptyDataSet"
    message = "DataSet is empty"

class SizesDontMatch(KNNError):
    status = "SizesDontMatch"
    message = "Sizes do not match"

class SmallK(KNNError):
    status = "SmallK"
    message = "k is too small"

class NotEnoughData(KNNError):
    status = "NotEnoughData"
    message = "Number of neighbours is larger than dataset"

class NoDataFitted(KNNError):
    status = "NoDataFitted"
    message = "No data fitted"

class SchemaError(KNNError):
    status = "SchemaError"
    message = "Invalid JSON format"

class FileError(KNNError):
    status = "FileError"
    message = "File could not be read or written"
