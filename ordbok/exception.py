class GeneratorException(Exception):
    pass


class EmptyResponseException(GeneratorException):
    def __init__(self, message: str = "Empty response") -> None:
        super().__init__(message)


class MalformedResponseException(GeneratorException):
    raw_text: str

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text
